"""Query stream parser — ``<id>,<checker>,<file>`` lines read one at a time."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class Query:
    """An external identifier bound to a checker class and a source file."""

    identifier: int
    def_class: str
    file_name: str


class QueryParser:
    """Reads queries from a line-oriented stream, skipping malformed lines."""

    def __init__(self, lines: Iterable[str], name: str = "-") -> None:
        self._lines = iter(lines)
        self.name = name
        self.lineno = 0
        self._has_error = False

    def has_error(self) -> bool:
        return self._has_error

    def next(self) -> Query | None:
        """Return the next well-formed query, or ``None`` at end of stream."""
        for line in self._lines:
            self.lineno += 1
            query = self._parse(line.rstrip("\r\n"))
            if query is not None:
                return query
            self._has_error = True
        return None

    def __iter__(self) -> Iterator[Query]:
        while True:
            query = self.next()
            if query is None:
                return
            yield query

    def _parse(self, line: str) -> Query | None:
        tokens = line.split(",")
        if len(tokens) < 3:
            logger.error("%s:%d: error: not enough ',' at the line", self.name, self.lineno)
            return None

        if not _IDENTIFIER.fullmatch(tokens[0]):
            logger.error("%s:%d: error: failed to parse the identifier", self.name, self.lineno)
            return None

        return Query(identifier=int(tokens[0]), def_class=tokens[1], file_name=tokens[2])
