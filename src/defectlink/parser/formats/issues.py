"""Decoder for the Coverity issue tracker JSON export (``{"issues": [...]}``)."""

from __future__ import annotations

import re
from typing import Any

from defectlink.defects.models import UNKNOWN_FILE, DefEvent, Defect
from defectlink.parser.base import (
    RecordError,
    TreeDecoder,
    children,
    find_child,
    require_object,
    value_of,
)

# label of the event synthesised for issues exported without a trace
MAIN_EVENT = "defect"

# "none" or a number; anything else means no CWE
_CWE_CATEGORY = re.compile(r"[0-9]+")


def _read_event(node: Any) -> DefEvent:
    node = require_object(node, "event")
    tag = value_of(node, "eventTag", "")
    if not tag:
        raise RecordError("event without eventTag")
    return DefEvent(
        event=tag,
        file_name=value_of(node, "filePathname", UNKNOWN_FILE),
        line=value_of(node, "lineNumber", 0),
        column=value_of(node, "columnNumber", 0),
        msg=value_of(node, "eventDescription", ""),
    )


def _main_event(node: dict[str, Any], props: Any) -> DefEvent:
    file_name = value_of(node, "mainEventFilePathname", "")
    if not file_name:
        raise RecordError("issue has neither events nor a main event")
    return DefEvent(
        event=MAIN_EVENT,
        file_name=file_name,
        line=value_of(node, "mainEventLineNumber", 0),
        msg=value_of(props, "subcategoryLongDescription", ""),
    )


class IssueDecoder(TreeDecoder):
    records_key = "issues"

    def decode(self, node: Any) -> Defect:
        node = require_object(node, "issue")

        checker = value_of(node, "checkerName", "")
        if not checker:
            raise RecordError("missing checkerName")

        props = find_child(node, "checkerProperties")
        events = [_read_event(e) for e in children(find_child(node, "events"))]
        if not events:
            events.append(_main_event(node, props))

        cwe = value_of(props, "cweCategory", "")
        return Defect(
            def_class=checker,
            events=events,
            cwe=int(cwe) if _CWE_CATEGORY.fullmatch(cwe) else 0,
        )
