"""Linker — match external queries against the defects of one document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from defectlink.correlate.query import Query, QueryParser
from defectlink.correlate.queue import DefectQueue, Normalizer
from defectlink.defects.models import Defect, ScanProps
from defectlink.parser.json_parser import JsonParser

logger = logging.getLogger(__name__)


class DocumentError(RuntimeError):
    """The defect document could not be decoded, so nothing can be linked."""


@dataclass(frozen=True)
class LinkedDefect:
    """A query together with the defect it claimed."""

    query: Query
    defect: Defect


@dataclass
class LinkReport:
    """Outcome of one linking run."""

    document: str
    matched: list[LinkedDefect] = field(default_factory=list)
    unmatched: list[Query] = field(default_factory=list)
    unclaimed: list[Defect] = field(default_factory=list)
    scan_props: ScanProps = field(default_factory=dict)
    parse_error: bool = False
    query_error: bool = False

    @property
    def clean(self) -> bool:
        return not (
            self.parse_error
            or self.query_error
            or self.unmatched
            or self.unclaimed
        )


class DefectLinker:
    """Loads every defect into a :class:`DefectQueue`, then drains queries."""

    def __init__(self, normalize: Normalizer | None = None) -> None:
        self._normalize = normalize

    def load(self, parser: JsonParser) -> DefectQueue:
        if parser.fatal_error is not None:
            raise DocumentError(f"{parser.document_name}: {parser.fatal_error}")

        queue = DefectQueue(self._normalize)
        for defect in parser:
            queue.insert(defect)
        return queue

    def run(
        self,
        parser: JsonParser,
        queries: QueryParser | Iterable[Query],
    ) -> LinkReport:
        # the whole document must be queued before the first lookup
        queue = self.load(parser)
        name = parser.document_name
        report = LinkReport(document=name, scan_props=dict(parser.scan_props))

        for query in queries:
            defect = queue.lookup(query.def_class, query.file_name)
            if defect is None:
                logger.warning(
                    "%s: warning: defect lookup failed, id = %d", name, query.identifier
                )
                report.unmatched.append(query)
                continue
            report.matched.append(LinkedDefect(query=query, defect=defect))

        if not queue.is_empty():
            report.unclaimed = queue.drain()
            logger.warning(
                "%s: error: offset detected (%d unclaimed defects)",
                name,
                len(report.unclaimed),
            )

        report.parse_error = parser.has_error()
        if isinstance(queries, QueryParser):
            report.query_error = queries.has_error()
        return report
