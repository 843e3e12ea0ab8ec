"""JSON report parser — parse once, sniff the format, then decode lazily."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

from defectlink.defects.models import Defect, ScanProps
from defectlink.parser.base import FormatError, NodeStatus, RecordError, TreeDecoder
from defectlink.parser.postproc import PostProcessor
from defectlink.parser.sniffer import DecoderKind, create_decoder, is_empty, sniff
from defectlink.source import InputDocument

logger = logging.getLogger(__name__)


class JsonParser:
    """Yields canonical defects from one JSON document.

    A syntax error or an unrecognized format is fatal: :attr:`fatal_error` is
    set and no defect is produced.  Malformed records are reported, counted as
    errors and skipped.
    """

    def __init__(
        self,
        document: InputDocument,
        post_processor: PostProcessor | None = None,
    ) -> None:
        self._doc = document
        self._decoder: TreeDecoder | None = None
        self.kind: DecoderKind | None = None
        self.scan_props: ScanProps = {}
        self.fatal_error: str | None = None
        self.defect_count = 0

        try:
            root = json.loads(document.text)
        except json.JSONDecodeError as e:
            self._fatal(e.msg, e.lineno)
            return
        except RecursionError:
            self._fatal("JSON document is nested too deeply")
            return

        if is_empty(root):
            logger.debug("%s: empty document", document.name)
            return

        try:
            self.kind = sniff(root)
            self._decoder = create_decoder(self.kind, root, post_processor)
        except FormatError as e:
            self.kind = None
            self._fatal(str(e))
            return

        try:
            self.scan_props = self._decoder.read_scan_props()
        except RecordError as e:
            self._data_error(f"failed to read scan properties: {e}")

    @property
    def document_name(self) -> str:
        return self._doc.name

    def has_error(self) -> bool:
        return self._doc.any_error

    def get_next(self) -> Defect | None:
        """Return the next decoded defect, or ``None`` once exhausted."""
        if self._decoder is None:
            return None

        while True:
            result = self._decoder.read_node()
            if result is None:
                return None

            if result.status is NodeStatus.DECODED:
                self.defect_count += 1
                return result.defect

            if result.status is NodeStatus.FAILED:
                self._data_error(
                    f"failed to read defect #{result.index}: {result.reason}"
                )

    def __iter__(self) -> Iterator[Defect]:
        while True:
            defect = self.get_next()
            if defect is None:
                return
            yield defect

    def _fatal(self, msg: str, line: int = 0) -> None:
        self.fatal_error = msg
        self._decoder = None
        self._doc.handle_error(msg, line)

    def _data_error(self, msg: str) -> None:
        self._doc.handle_error()
        if self._doc.silent:
            return
        logger.error("%s: error: %s", self._doc.name, msg)
