from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from ..models import (
    ArchitectureDataset,
    to_action,
    to_application,
    to_business_entity,
    to_governance_role,
    to_integration,
    to_knowledge_domain,
    to_person,
    to_stage,
    to_team,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# dataset field -> (collection key, converter)
COLLECTIONS: dict[str, tuple[str, Callable[[dict[str, Any]], Any]]] = {
    "stages": ("valueChainStages", to_stage),
    "actions": ("actions", to_action),
    "teams": ("teams", to_team),
    "roles": ("roles", to_governance_role),
    "persons": ("persons", to_person),
    "applications": ("applications", to_application),
    "domains": ("knowledgeDomains", to_knowledge_domain),
    "entities": ("businessEntities", to_business_entity),
    "integrations": ("integrations", to_integration),
}


def _convert(name: str, raw: Any, converter: Callable[[dict[str, Any]], T]) -> tuple[T, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"Collection '{name}' must be a list of objects.")
    items: list[T] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError(f"Each item in '{name}' must be an object.")
        items.append(converter(item))
    return tuple(items)


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _load_bundle(path: Path) -> dict[str, Any]:
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError("Input JSON must be an object keyed by collection name.")
    return raw


def _load_directory(path: Path) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    for key, _ in COLLECTIONS.values():
        file_path = path / f"{key}.json"
        if not file_path.is_file():
            continue
        raw[key] = _read_json(file_path)
    return raw


def load_dataset(path: Path) -> ArchitectureDataset:
    """Load the model from a fixture directory or a single bundled JSON file."""
    path = Path(path)
    raw = _load_directory(path) if path.is_dir() else _load_bundle(path)

    collections: dict[str, tuple[Any, ...]] = {}
    for field_name, (key, converter) in COLLECTIONS.items():
        if key not in raw:
            logger.warning("Collection '%s' not found in %s; using an empty collection", key, path)
            collections[field_name] = ()
            continue
        collections[field_name] = _convert(key, raw[key], converter)

    dataset = ArchitectureDataset(**collections)
    logger.info("Loaded architecture model from %s: %s", path, dataset.counts())
    return dataset


def dump_result_file(path: Path, payload: dict[str, object]) -> None:
    path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
