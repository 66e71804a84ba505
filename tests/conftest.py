from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
SAMPLE_MODEL_DIR = ROOT_DIR / "examples" / "sample_model"

for path in (ROOT_DIR, SRC_DIR):
    value = str(path)
    if path.exists() and value not in sys.path:
        sys.path.insert(0, value)


@pytest.fixture
def sample_model_dir() -> Path:
    return SAMPLE_MODEL_DIR
