"""Post-processing rules applied to compiler and shell-linter defects."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

from defectlink.defects.models import Defect

Rule = Callable[[Defect], None]

COMPILER_WARNING = "COMPILER_WARNING"
GCC_ANALYZER_WARNING = "GCC_ANALYZER_WARNING"

_CWE_SUFFIX = re.compile(r" \[CWE-([0-9]+)\]$")
_ANALYZER_SUFFIX = re.compile(r" \[-Wanalyzer-[^\]]+\]$")


def extract_cwe_suffix(defect: Defect) -> None:
    """Move a trailing ``[CWE-<n>]`` from the key event message to ``cwe``."""
    evt = defect.key_event
    m = _CWE_SUFFIX.search(evt.msg)
    if not m:
        return
    evt.msg = evt.msg[: m.start()]
    if not defect.cwe:
        defect.cwe = int(m.group(1))


def classify_analyzer(defect: Defect) -> None:
    """Re-classify ``-Wanalyzer-*`` compiler warnings."""
    if defect.def_class != COMPILER_WARNING:
        return
    if _ANALYZER_SUFFIX.search(defect.key_event.msg):
        defect.def_class = GCC_ANALYZER_WARNING


DEFAULT_RULES: tuple[Rule, ...] = (
    extract_cwe_suffix,
    classify_analyzer,
)


class PostProcessor:
    """Applies an ordered list of rules to each fully decoded defect."""

    def __init__(self, rules: Sequence[Rule] | None = None) -> None:
        self._rules = tuple(DEFAULT_RULES if rules is None else rules)

    def apply(self, defect: Defect) -> None:
        if not defect.events:
            return
        for rule in self._rules:
            rule(defect)
