"""Decoder for the JSON diagnostics emitted by GCC (``-fdiagnostics-format=json``)."""

from __future__ import annotations

from typing import Any

from defectlink.defects.models import UNKNOWN_FILE, UNKNOWN_MSG, DefEvent, Defect
from defectlink.parser.base import (
    TreeDecoder,
    children,
    find_child,
    first_child,
    require_object,
    value_of,
)
from defectlink.parser.postproc import COMPILER_WARNING, PostProcessor


def read_event(node: Any) -> DefEvent | None:
    """Decode one diagnostic; ``None`` when it has no ``kind``."""
    node = require_object(node, "diagnostic")

    kind = value_of(node, "kind", "")
    if not kind:
        return None

    evt = DefEvent(event=kind)

    # location lives in locations[0].caret
    caret = find_child(first_child(find_child(node, "locations")), "caret")
    if caret is not None:
        evt.file_name = value_of(caret, "file", UNKNOWN_FILE)
        evt.line = value_of(caret, "line", 0)
        evt.column = value_of(caret, "byte-column", 0)

    evt.msg = value_of(node, "message", UNKNOWN_MSG)

    option = value_of(node, "option", "")
    if option:
        evt.msg += f" [{option}]"

    return evt


class CompilerDecoder(TreeDecoder):
    """Top-level array of diagnostics, each with optional ``children``."""

    def __init__(self, root: Any, post_processor: PostProcessor | None = None) -> None:
        super().__init__(root)
        self._post_proc = post_processor or PostProcessor()

    def iter_records(self, root: Any):
        return children(root)

    def decode(self, node: Any) -> Defect | None:
        key_event = read_event(node)
        if key_event is None:
            return None

        defect = Defect(def_class=COMPILER_WARNING, events=[key_event])

        for child in children(find_child(node, "children")):
            evt = read_event(child)
            if evt is not None:
                defect.events.append(evt)

        meta = find_child(node, "metadata")
        if meta is not None:
            defect.cwe = value_of(meta, "cwe", 0)

        self._post_proc.apply(defect)
        return defect
