"""Decoder for the native ``{"scan": ..., "defects": [...]}`` JSON format."""

from __future__ import annotations

import json
from typing import Any

from defectlink.defects.models import UNKNOWN_FILE, DefEvent, Defect, ScanProps
from defectlink.parser.base import (
    RecordError,
    TreeDecoder,
    children,
    find_child,
    require_object,
    value_of,
)


def _read_event(node: Any) -> DefEvent:
    node = require_object(node, "event")
    kind = value_of(node, "event", "")
    if not kind:
        raise RecordError("event without a name")
    return DefEvent(
        event=kind,
        file_name=value_of(node, "file_name", UNKNOWN_FILE),
        line=value_of(node, "line", 0),
        column=value_of(node, "column", 0),
        msg=value_of(node, "message", ""),
    )


def _scan_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    # numbers, booleans, null and nested values keep their JSON spelling
    return json.dumps(value)


class NativeDecoder(TreeDecoder):
    records_key = "defects"

    def read_scan_props(self) -> ScanProps:
        scan = find_child(self._root, "scan")
        if not isinstance(scan, dict):
            return {}
        return {key: _scan_value(value) for key, value in scan.items()}

    def decode(self, node: Any) -> Defect:
        node = require_object(node)

        checker = value_of(node, "checker", "")
        if not checker:
            raise RecordError("missing checker")

        events = find_child(node, "events")
        if not isinstance(events, list) or not events:
            raise RecordError("missing events")

        return Defect(
            def_class=checker,
            events=[_read_event(e) for e in children(events)],
            cwe=value_of(node, "cwe", 0),
            annotation=value_of(node, "annotation", ""),
        )
