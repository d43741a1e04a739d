"""Mini README: Storage backends holding the month mapping.

Structure:
    * MappingStorage - protocol implemented by every backend.
    * JsonFileStorage - JSON document with one namespaced entry per application.
    * InMemoryStorage - dictionary backend used by tests and demos.

A backend only ever reads or writes the whole ``month key -> record`` mapping.
Reading a missing or corrupt entry yields an empty mapping; the problem is
logged and never raised.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class MappingStorage(Protocol):
    """Persist the mapping from month key to serialised month record."""

    def read_all(self) -> Dict[str, Any]:
        ...

    def write_all(self, mapping: Dict[str, Any]) -> None:
        ...


class JsonFileStorage:
    """Keep the month mapping under ``namespace`` inside a JSON document."""

    def __init__(self, path: Path, namespace: str = "monthbudget:v1") -> None:
        self.path = Path(path)
        self.namespace = namespace
        LOGGER.debug("JSON storage at %s (namespace %s)", self.path, namespace)

    def _read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as error:
            LOGGER.warning("Ignoring unreadable budget document %s: %s", self.path, error)
            return {}
        if not isinstance(document, dict):
            LOGGER.warning("Ignoring budget document %s: top level is not an object", self.path)
            return {}
        return document

    def read_all(self) -> Dict[str, Any]:
        entry = self._read_document().get(self.namespace)
        if entry is None:
            return {}
        if not isinstance(entry, dict):
            LOGGER.warning("Ignoring malformed entry %s in %s", self.namespace, self.path)
            return {}
        return entry

    def write_all(self, mapping: Dict[str, Any]) -> None:
        """Rewrite the namespaced entry, keeping other entries of the document."""

        document = self._read_document()
        document[self.namespace] = mapping
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temporary = self.path.with_name(self.path.name + ".tmp")
        with temporary.open("w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2, ensure_ascii=False)
        temporary.replace(self.path)


class InMemoryStorage:
    """Dictionary backend; copies on every access like a real serialisation would."""

    def __init__(self, mapping: Optional[Dict[str, Any]] = None) -> None:
        self._mapping: Dict[str, Any] = copy.deepcopy(mapping) if mapping else {}
        self.writes = 0

    def read_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._mapping)

    def write_all(self, mapping: Dict[str, Any]) -> None:
        self._mapping = copy.deepcopy(mapping)
        self.writes += 1
