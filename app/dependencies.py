import logging
from functools import lru_cache
from pathlib import Path

from app.config import get_settings
from archlens.core import ModelSnapshot, build_snapshot
from archlens.io import load_dataset

logger = logging.getLogger(__name__)


@lru_cache
def _snapshot_for(data_path: Path) -> ModelSnapshot:
    try:
        dataset = load_dataset(data_path)
    except Exception:
        logger.exception("Failed to load architecture model from %s", data_path)
        raise
    return build_snapshot(dataset)


def get_snapshot() -> ModelSnapshot:
    return _snapshot_for(get_settings().data_path)


def clear_snapshot_cache() -> None:
    _snapshot_for.cache_clear()
