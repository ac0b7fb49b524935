from __future__ import annotations

import runpy
from pathlib import Path

import remoteconsole_app.__main__ as console_main


def test_main_defaults_to_connect(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(console_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = console_main.main([])
    assert rc == 0
    assert calls == [["connect"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(console_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = console_main.main(["mc.local", "25575", "secret"])
    assert rc == 0
    assert calls == [["mc.local", "25575", "secret"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "apps"
        / "console"
        / "remoteconsole_app"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result
