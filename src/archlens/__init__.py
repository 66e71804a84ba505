from __future__ import annotations

from pathlib import Path
import tomllib

from .core import build_snapshot, calculate_all_risks
from .io import load_dataset

__version__ = "0.1.0"


def get_runtime_version() -> str:
    """Version from the source checkout's pyproject.toml, else the packaged ``__version__``."""
    path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if not path.exists():
        return __version__
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return __version__
    project = data.get("project", {}) or {}
    if str(project.get("name", "")).strip() != "archlens":
        return __version__
    return str(project.get("version", "")).strip() or __version__


__all__ = ["__version__", "build_snapshot", "calculate_all_risks", "get_runtime_version", "load_dataset"]
