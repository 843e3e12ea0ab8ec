"""Defect queue — decoded defects keyed by checker class and normalized file."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from defectlink.defects.models import Defect

logger = logging.getLogger(__name__)

Normalizer = Callable[[str], str]


def _identity(path: str) -> str:
    return path


class DefectQueue:
    """Two-level index ``def_class -> file -> FIFO of defects``.

    Neither level ever holds an empty entry: a key that is present always
    has at least one defect queued under it.
    """

    def __init__(self, normalize: Normalizer | None = None) -> None:
        self._normalize = normalize or _identity
        self._store: dict[str, dict[str, deque[Defect]]] = {}

    def insert(self, defect: Defect) -> None:
        path = self._normalize(defect.key_event.file_name)
        row = self._store.setdefault(defect.def_class, {})
        row.setdefault(path, deque()).append(defect)

    def lookup(self, def_class: str, file_name: str) -> Defect | None:
        """Remove and return the oldest defect queued under the key."""
        row = self._store.get(def_class)
        if row is None:
            logger.debug("%s: not found", def_class)
            return None

        path = self._normalize(file_name)
        col = row.get(path)
        if col is None:
            logger.debug("%s: %s: not found", def_class, path)
            return None

        defect = col.popleft()
        if not col:
            del row[path]
            logger.debug("%s: %s: list removed, %d left in row", def_class, path, len(row))
            if not row:
                del self._store[def_class]
                logger.debug("%s: row removed, %d rows left", def_class, len(self._store))

        return defect

    def is_empty(self) -> bool:
        return not self._store

    def __len__(self) -> int:
        return sum(len(col) for row in self._store.values() for col in row.values())

    def drain(self) -> list[Defect]:
        """Remove and return every queued defect, class by class, file by file."""
        remaining = [
            defect
            for row in self._store.values()
            for col in row.values()
            for defect in col
        ]
        self._store.clear()
        return remaining
