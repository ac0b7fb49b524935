"""CLI entrypoints for the remote console, markup rendering, diagnostics, and transcript replay."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path

from remoteconsole_core import DiagnosticsExporter, build_doctor_payload, load_config, load_session_events
from remoteconsole_core.logging_setup import configure_logging, install_crash_hooks, register_secret
from remoteconsole_markup import MarkupRenderer, list_codes
from remoteconsole_rcon import ServerEndpoint, TranscriptReplay

from .console import error_line, run_console, use_color

COMMANDS = ("connect", "render", "codes", "doctor", "replay")
MISSING_ARGUMENTS = "Please enter server address, port and password."
CONNECT_OPTIONS = ("-h", "--help", "--timeout", "--tls-mode", "--transcript", "--no-banner", "--color")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def cmd_connect(args: argparse.Namespace) -> int:
    cfg = load_config()
    if args.color:
        cfg.console.color = args.color
    if args.timeout is not None:
        cfg.server.timeout_s = args.timeout
    if args.tls_mode is not None:
        cfg.server.tls_mode = args.tls_mode
    if args.no_banner:
        cfg.console.banner = False

    env_password = os.environ.get(cfg.server.password_env)
    register_secret(env_password)
    register_secret(args.password)
    password = args.password or env_password
    if not password:
        print(error_line(MISSING_ARGUMENTS, use_color(cfg.console.color, sys.stdout)))
        return 2

    endpoint = ServerEndpoint(address=args.address or cfg.server.address, port=args.port or cfg.server.port)
    transcript_path = Path(args.transcript).expanduser() if args.transcript else None

    install_crash_hooks()
    return run_console(cfg, endpoint, password, transcript_path=transcript_path)


def cmd_render(args: argparse.Namespace) -> int:
    renderer = MarkupRenderer(styled=use_color(args.color, sys.stdout))
    if args.text:
        lines = [" ".join(args.text)]
    else:
        lines = [line.rstrip("\r\n") for line in sys.stdin]

    for line in lines:
        print(renderer.strip(line) if args.strip else renderer.render(line))
    return 0


def cmd_codes(args: argparse.Namespace) -> int:
    rows = list_codes()
    if args.json:
        _print_json([{"code": code, "kind": kind, "value": value} for code, kind, value in rows])
        return 0

    renderer = MarkupRenderer(styled=use_color(args.color, sys.stdout))
    for code, kind, value in rows:
        print(f"§{code}  " + renderer.render(f"§{code}{kind:<9} {value}"))
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = build_doctor_payload(cfg)

    if args.export:
        exporter = DiagnosticsExporter()
        out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
        bundle = exporter.bundle(
            cfg=cfg,
            doctor_payload=payload,
            recent_session_events=load_session_events(),
            output_dir=out_dir,
        )
        payload["diagnostics_bundle"] = str(bundle)

    _print_json(payload)
    return 0


def cmd_replay(args: argparse.Namespace) -> int:
    runner = TranscriptReplay()
    path = Path(args.transcript)
    report = runner.run(path, strict=not args.no_strict)

    if args.render:
        renderer = MarkupRenderer(styled=use_color(args.color, sys.stdout))
        for line in runner.render(path, renderer):
            print(line)
    else:
        payload = asdict(report)
        payload["success"] = len(report.errors) == 0
        _print_json(payload)
    return 0 if not report.errors else 2


def _add_color_option(parser: argparse.ArgumentParser, default: str | None) -> None:
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default=default,
        help="Terminal styling: auto enables it only for a TTY",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="remoteconsole", description="Interactive RCON console with color rendering")
    sub = parser.add_subparsers(dest="command", required=True)

    connect_cmd = sub.add_parser("connect", help="Connect to a server and open the interactive console")
    connect_cmd.add_argument("address", nargs="?", default=None, help="Server address (default from config)")
    connect_cmd.add_argument("port", nargs="?", type=_port, default=None, help="RCON port (default from config)")
    connect_cmd.add_argument("password", nargs="?", default=None, help="RCON password (default from environment)")
    connect_cmd.add_argument("--timeout", type=float, default=None, help="Socket timeout in seconds")
    connect_cmd.add_argument("--tls-mode", type=int, choices=[0, 1, 2], default=None, help="0 off, 1 verified, 2 unverified")
    connect_cmd.add_argument("--transcript", default=None, help="Record commands and responses to this JSONL file")
    connect_cmd.add_argument("--no-banner", action="store_true", help="Skip the version banner")
    _add_color_option(connect_cmd, None)
    connect_cmd.set_defaults(func=cmd_connect)

    render_cmd = sub.add_parser("render", help="Render markup text from arguments or stdin")
    render_cmd.add_argument("text", nargs="*", help="Text to render; reads stdin when omitted")
    render_cmd.add_argument("--strip", action="store_true", help="Remove markup instead of styling it")
    _add_color_option(render_cmd, "auto")
    render_cmd.set_defaults(func=cmd_render)

    codes_cmd = sub.add_parser("codes", help="Print the color and formatting code legend")
    codes_cmd.add_argument("--json", action="store_true", help="Print the legend as JSON")
    _add_color_option(codes_cmd, "auto")
    codes_cmd.set_defaults(func=cmd_codes)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics for the terminal, libraries and config")
    doctor_cmd.add_argument("--export", action="store_true", help="Export offline diagnostics bundle")
    doctor_cmd.add_argument("--out-dir", default=None, help="Optional output directory for diagnostics bundle")
    doctor_cmd.set_defaults(func=cmd_doctor)

    replay_cmd = sub.add_parser("replay", help="Analyze or re-render a recorded session transcript")
    replay_cmd.add_argument("--transcript", required=True, help="Path to JSONL transcript")
    replay_cmd.add_argument("--no-strict", action="store_true", help="Skip command/response pairing checks")
    replay_cmd.add_argument("--render", action="store_true", help="Print rendered responses instead of the report")
    _add_color_option(replay_cmd, "auto")
    replay_cmd.set_defaults(func=cmd_replay)

    return parser


def normalize_argv(argv: list[str]) -> list[str]:
    """Treat ``remoteconsole HOST PORT PASSWORD`` as ``remoteconsole connect HOST PORT PASSWORD``."""
    if not argv:
        return ["connect"]
    first = argv[0]
    if first in COMMANDS or first.startswith("-"):
        return list(argv)

    # The password may itself start with "-", so positionals go after "--".
    positionals: list[str] = []
    index = 0
    while index < len(argv) and len(positionals) < 3:
        item = argv[index]
        if item.startswith("-") and (len(positionals) < 2 or item.split("=", 1)[0] in CONNECT_OPTIONS):
            break
        positionals.append(item)
        index += 1
    return ["connect", *argv[index:], "--", *positionals]


def main(argv: list[str] | None = None) -> int:
    configure_logging(keep_files=load_config().diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(normalize_argv(sys.argv[1:] if argv is None else argv))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
