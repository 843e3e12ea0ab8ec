"""Decoder for ShellCheck's ``--format=json1`` output."""

from __future__ import annotations

from typing import Any

from defectlink.defects.models import UNKNOWN_FILE, UNKNOWN_MSG, DefEvent, Defect
from defectlink.parser.base import TreeDecoder, require_object, value_of
from defectlink.parser.postproc import PostProcessor

SHELLCHECK_WARNING = "SHELLCHECK_WARNING"


def read_event(node: Any) -> DefEvent | None:
    node = require_object(node, "comment")

    level = value_of(node, "level", "")
    if not level:
        return None

    evt = DefEvent(
        event=level,
        file_name=value_of(node, "file", UNKNOWN_FILE),
        line=value_of(node, "line", 0),
        column=value_of(node, "byte-column", 0),
        msg=value_of(node, "message", UNKNOWN_MSG),
    )

    code = value_of(node, "code", "")
    if code:
        evt.msg += f" [SC{code}]"

    return evt


class ShellDecoder(TreeDecoder):
    """``{"comments": [...]}`` with one flat record per finding."""

    records_key = "comments"

    def __init__(self, root: Any, post_processor: PostProcessor | None = None) -> None:
        super().__init__(root)
        self._post_proc = post_processor or PostProcessor()

    def decode(self, node: Any) -> Defect | None:
        evt = read_event(node)
        if evt is None:
            return None

        defect = Defect(def_class=SHELLCHECK_WARNING, events=[evt])
        self._post_proc.apply(defect)
        return defect
