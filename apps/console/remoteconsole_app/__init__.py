"""Interactive RCON console application."""
