"""
catalog.py — Algorithm metadata store
======================================
In-memory catalog of AlgorithmConfig entries, the records the index page
and the /api/algorithms routes list.

Rules:
  - (type, name) is unique.  `add` refuses a second entry with the same
    pair (DuplicateAlgorithmError) instead of cleaning duplicates later.
  - `seed()` fills in the registry's algorithms that are missing and is
    safe to call on every start-up: a second call adds nothing.
  - `resolve(config)` maps an entry back to its tracer via (type, name).

Persistence is a plain JSON file (a list of entries), used only when a
path is configured.
"""

import json
import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import algorithms
from engine.errors import DuplicateAlgorithmError, InvalidInputError, UnknownAlgorithmError

logger = logging.getLogger(__name__)


@dataclass
class AlgorithmConfig:
    type:        str
    name:        str
    description: str             = ""
    parameters:  Dict[str, Any]  = field(default_factory=dict)
    created_by:  str             = "system"
    created_at:  str             = ""
    id:          str             = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":          self.id,
            "type":        self.type,
            "name":        self.name,
            "description": self.description,
            "parameters":  dict(self.parameters),
            "createdBy":   self.created_by,
            "createdAt":   self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AlgorithmConfig":
        try:
            return cls(
                type=data["type"],
                name=data["name"],
                description=data.get("description", ""),
                parameters=dict(data.get("parameters") or {}),
                created_by=data.get("createdBy", data.get("created_by", "system")),
                created_at=data.get("createdAt", data.get("created_at", "")),
                id=data.get("id", ""),
            )
        except KeyError as exc:
            raise InvalidInputError(f"Catalog entry is missing field {exc.args[0]!r}") from None


class Catalog:
    """
    Attributes:
        entries : {id: AlgorithmConfig} in insertion order.
    """

    def __init__(self):
        self.entries: Dict[str, AlgorithmConfig] = {}
        self._by_pair: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def add(self, config: AlgorithmConfig) -> AlgorithmConfig:
        if config.type not in algorithms.CATEGORIES:
            raise InvalidInputError(f"Unknown algorithm type: {config.type}")
        pair = (config.type, config.name)
        with self._lock:
            if pair in self._by_pair:
                raise DuplicateAlgorithmError(
                    f"Algorithm {config.name!r} of type {config.type!r} already exists"
                )
            if not config.id:
                config.id = uuid.uuid4().hex[:12]
            elif config.id in self.entries:
                raise DuplicateAlgorithmError(f"Algorithm id {config.id!r} already exists")
            if not config.created_at:
                config.created_at = datetime.now(timezone.utc).isoformat()
            self.entries[config.id] = config
            self._by_pair[pair] = config.id
        return config

    def seed(self) -> int:
        """Add every registered algorithm that is not catalogued yet."""
        added = 0
        for info in algorithms.list_algorithms():
            if self.find(info.category, info.label) is not None:
                continue
            self.add(AlgorithmConfig(
                type=info.category,
                name=info.label,
                description=info.description,
                parameters={"key": info.key, "inputs": list(info.inputs)},
            ))
            added += 1
        logger.info("catalog seeded: %d entr%s added", added, "y" if added == 1 else "ies")
        return added

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, config_id: str) -> Optional[AlgorithmConfig]:
        return self.entries.get(config_id)

    def find(self, type_: str, name: str) -> Optional[AlgorithmConfig]:
        config_id = self._by_pair.get((type_, name))
        return self.entries.get(config_id) if config_id else None

    def by_type(self, type_: str) -> List[AlgorithmConfig]:
        return [c for c in self.entries.values() if c.type == type_]

    def list(self) -> List[AlgorithmConfig]:
        return list(self.entries.values())

    def resolve(self, config: AlgorithmConfig) -> "algorithms.AlgoInfo":
        info = algorithms.find_by_label(config.type, config.name)
        if info is None:
            raise UnknownAlgorithmError(
                f"No tracer for {config.type} algorithm {config.name!r}"
            )
        return info

    def __len__(self) -> int:
        return len(self.entries)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load_json(self, path: str) -> int:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, list):
            raise InvalidInputError(f"Catalog file {path} must contain a JSON list")
        for item in data:
            self.add(AlgorithmConfig.from_dict(item))
        logger.info("loaded %d catalog entries from %s", len(data), path)
        return len(data)

    def save_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump([c.to_dict() for c in self.list()], fh, indent=2)
        logger.info("saved %d catalog entries to %s", len(self), path)


__all__ = ["AlgorithmConfig", "Catalog"]
