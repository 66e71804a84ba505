from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys
import threading
import time
import tomllib
import urllib.request
import webbrowser
from pathlib import Path


ROOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765

DEFAULT_CLI_ARGS = [
    "examples/sample_model",
    "--out",
    "examples/output/sample_model_risks.json",
]


def _format_cmd(cmd: list[str]) -> str:
    if os.name == "nt":
        return subprocess.list2cmdline(cmd)
    return shlex.join(cmd)


def _run(cmd: list[str], *, cwd: Path | None = None, env: dict[str, str] | None = None) -> int:
    print(f"+ {_format_cmd(cmd)}")
    completed = subprocess.run(cmd, cwd=cwd or ROOT_DIR, env=env)
    return completed.returncode


def _venv_python() -> Path:
    if os.name == "nt":
        return ROOT_DIR / ".venv" / "Scripts" / "python.exe"
    return ROOT_DIR / ".venv" / "bin" / "python"


def _python_for_tasks() -> str:
    venv_python = _venv_python()
    if venv_python.exists():
        return str(venv_python)
    return sys.executable


def _ensure_venv() -> int:
    venv_python = _venv_python()
    if venv_python.exists():
        return 0
    return _run([sys.executable, "-m", "venv", ".venv"])


def _has_editable_install_support() -> bool:
    pyproject = ROOT_DIR / "pyproject.toml"
    if not pyproject.exists():
        return False
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return "build-system" in data and "project" in data


def _install_dependencies(python_exec: str) -> int:
    if _has_editable_install_support():
        return _run([python_exec, "-m", "pip", "install", "-e", ".[dev]"])
    print("error: no install target found (pyproject.toml).", file=sys.stderr)
    return 2


def cmd_setup(args: argparse.Namespace) -> int:
    if args.venv:
        code = _ensure_venv()
        if code != 0:
            return code
    return _install_dependencies(_python_for_tasks())


def cmd_test(args: argparse.Namespace) -> int:
    passthrough = list(args.pytest_args or [])
    if passthrough and passthrough[0] == "--":
        passthrough = passthrough[1:]
    return _run([_python_for_tasks(), "-m", "pytest", *passthrough])


def cmd_cli(args: argparse.Namespace) -> int:
    passthrough = list(args.cli_args or [])
    if passthrough and passthrough[0] == "--":
        passthrough = passthrough[1:]
    if not passthrough:
        passthrough = list(DEFAULT_CLI_ARGS)
    return _run([_python_for_tasks(), "-m", "archlens.cli.main", *passthrough])


def _open_browser_when_ready(url: str, health_url: str, timeout_seconds: float = 30.0) -> None:
    def _worker() -> None:
        deadline = time.time() + timeout_seconds
        while time.time() < deadline:
            try:
                with urllib.request.urlopen(health_url, timeout=2):
                    webbrowser.open(url)
                    return
            except OSError:
                time.sleep(0.5)

    threading.Thread(target=_worker, daemon=True).start()


def cmd_web(args: argparse.Namespace) -> int:
    if not (ROOT_DIR / "app" / "main.py").exists():
        print("error: app/main.py not found.", file=sys.stderr)
        return 2

    env = os.environ.copy()
    if args.data:
        env["ARCHLENS_DATA_PATH"] = str(Path(args.data).resolve())

    app_url = f"http://{args.host}:{args.port}"
    if args.open:
        _open_browser_when_ready(f"{app_url}/api/blueprint", f"{app_url}/healthz")

    print(f"starting web app at {app_url}")
    return _run(
        [
            _python_for_tasks(),
            "-m",
            "uvicorn",
            "app.main:app",
            "--host",
            args.host,
            "--port",
            str(args.port),
            "--reload",
        ],
        env=env,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Task runner for archlens.")
    sub = parser.add_subparsers(dest="command", required=True)

    setup_parser = sub.add_parser("setup", help="Install project dependencies.")
    setup_parser.add_argument("--venv", action="store_true", help="Create .venv if missing before install.")
    setup_parser.set_defaults(func=cmd_setup)

    test_parser = sub.add_parser("test", help="Run pytest.")
    test_parser.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Optional pytest args.")
    test_parser.set_defaults(func=cmd_test)

    cli_parser = sub.add_parser("cli", help="Run the risk CLI.")
    cli_parser.add_argument("cli_args", nargs=argparse.REMAINDER, help="Args forwarded to cli.main.")
    cli_parser.set_defaults(func=cmd_cli)

    web_parser = sub.add_parser("web", help=f"Run the JSON API on {DEFAULT_HOST}:{DEFAULT_PORT}.")
    web_parser.add_argument("--host", default=DEFAULT_HOST, help=f"Web host (default: {DEFAULT_HOST}).")
    web_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help=f"Web port (default: {DEFAULT_PORT}).")
    web_parser.add_argument("--data", default="", help="Fixture directory or bundle (overrides ARCHLENS_DATA_PATH).")
    web_parser.add_argument("--open", action="store_true", help="Open the blueprint endpoint in a browser.")
    web_parser.set_defaults(func=cmd_web)

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
