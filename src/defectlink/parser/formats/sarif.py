"""Decoder for SARIF 2.1.0 logs (``{"runs": [...]}``)."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from typing import Any

from defectlink.defects.models import UNKNOWN_FILE, UNKNOWN_MSG, DefEvent, Defect, ScanProps
from defectlink.parser.base import (
    TreeDecoder,
    children,
    find_child,
    first_child,
    require_object,
    value_of,
)

logger = logging.getLogger(__name__)

SARIF_WARNING = "SARIF_WARNING"
SHELLCHECK_WARNING = "SHELLCHECK_WARNING"

_SHELLCHECK_RULE = re.compile(r"^SC[0-9]+$")
_CWE_TAG = re.compile(r"^(?:external/cwe/)?cwe-([0-9]+)$", re.IGNORECASE)
_DECIMAL = re.compile(r"[0-9]+")


def _rule_cwe(rule: Any) -> int:
    """CWE of a ``reportingDescriptor`` from ``properties.cwe`` or its tags."""
    props = find_child(rule, "properties")
    cwe = find_child(props, "cwe")
    if isinstance(cwe, int) and not isinstance(cwe, bool):
        return cwe
    if isinstance(cwe, str):
        m = _CWE_TAG.match(cwe)
        if m:
            return int(m.group(1))
        if _DECIMAL.fullmatch(cwe):
            return int(cwe)

    for tag in children(find_child(props, "tags")):
        m = _CWE_TAG.match(tag) if isinstance(tag, str) else None
        if m:
            return int(m.group(1))
    return 0


def _read_location(evt: DefEvent, loc: Any) -> None:
    phys = find_child(loc, "physicalLocation")
    if phys is None:
        return

    uri = value_of(find_child(phys, "artifactLocation"), "uri", "")
    if uri:
        evt.file_name = uri.removeprefix("file://")

    region = find_child(phys, "region")
    evt.line = value_of(region, "startLine", 0)
    evt.column = value_of(region, "startColumn", 0)


class SarifDecoder(TreeDecoder):
    """Results of every run, in run order."""

    records_key = "runs"

    def __init__(self, root: Any) -> None:
        self._cwe_by_rule: dict[str, int] = {}
        super().__init__(root)

    def iter_records(self, root: Any) -> Iterator[Any]:
        runs = super().iter_records(root)
        return self._results(runs)

    def _results(self, runs) -> Iterator[Any]:
        for run in runs:
            if not isinstance(run, dict):
                logger.debug("Skipping SARIF run that is not an object")
                continue
            self._cwe_by_rule = {}
            driver = find_child(find_child(run, "tool"), "driver")
            for rule in children(find_child(driver, "rules")):
                rule_id = find_child(rule, "id")
                if isinstance(rule_id, str):
                    self._cwe_by_rule[rule_id] = _rule_cwe(rule)
            yield from children(find_child(run, "results"))

    def read_scan_props(self) -> ScanProps:
        run = first_child(find_child(self._root, "runs"))
        driver = find_child(find_child(run, "tool"), "driver")
        if driver is None:
            return {}

        props: ScanProps = {}
        name = value_of(driver, "name", "")
        if name:
            props["tool"] = name
        version = value_of(driver, "version", "") or value_of(
            driver, "semanticVersion", ""
        )
        if version:
            props["tool-version"] = version
        url = value_of(driver, "informationUri", "")
        if url:
            props["tool-url"] = url
        return props

    def decode(self, node: Any) -> Defect:
        node = require_object(node, "result")

        rule_id = value_of(node, "ruleId", "")
        evt = DefEvent(event=value_of(node, "level", "") or "warning")
        _read_location(evt, first_child(find_child(node, "locations")))

        evt.msg = value_of(find_child(node, "message"), "text", UNKNOWN_MSG)
        if rule_id:
            evt.msg += f" [{rule_id}]"

        defect = Defect(
            def_class=SHELLCHECK_WARNING
            if _SHELLCHECK_RULE.match(rule_id)
            else SARIF_WARNING,
            events=[evt],
            cwe=self._cwe_by_rule.get(rule_id, 0),
        )

        code_flow = first_child(find_child(node, "codeFlows"))
        flow = first_child(find_child(code_flow, "threadFlows"))
        for step in children(find_child(flow, "locations")):
            loc = find_child(step, "location")
            note = DefEvent(event="note", file_name=UNKNOWN_FILE)
            _read_location(note, loc)
            note.msg = value_of(find_child(loc, "message"), "text", "")
            defect.events.append(note)

        return defect
