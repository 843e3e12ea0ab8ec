"""Tests for the defect post-processing rules."""

from __future__ import annotations

from defectlink.defects.models import DefEvent, Defect
from defectlink.parser.postproc import PostProcessor


def _defect(msg: str, def_class: str = "COMPILER_WARNING", cwe: int = 0) -> Defect:
    return Defect(
        def_class=def_class,
        events=[DefEvent(event="warning", file_name="a.c", msg=msg)],
        cwe=cwe,
    )


def test_cwe_suffix_moved_to_field():
    defect = _defect("use of tainted value [CWE-20]")
    PostProcessor().apply(defect)
    assert defect.cwe == 20
    assert defect.key_event.msg == "use of tainted value"


def test_cwe_field_not_overwritten():
    defect = _defect("x [CWE-20]", cwe=7)
    PostProcessor().apply(defect)
    assert defect.cwe == 7
    assert defect.key_event.msg == "x"


def test_analyzer_reclassified():
    defect = _defect("double free [-Wanalyzer-double-free]")
    PostProcessor().apply(defect)
    assert defect.def_class == "GCC_ANALYZER_WARNING"


def test_other_classes_untouched():
    defect = _defect("x [-Wanalyzer-double-free]", def_class="SHELLCHECK_WARNING")
    PostProcessor().apply(defect)
    assert defect.def_class == "SHELLCHECK_WARNING"

    plain = _defect("m [-Wfoo]")
    PostProcessor().apply(plain)
    assert plain.def_class == "COMPILER_WARNING"
    assert plain.key_event.msg == "m [-Wfoo]"


def test_injected_rules():
    seen = []

    def rename(defect: Defect) -> None:
        seen.append(defect.def_class)
        defect.def_class = "CUSTOM"

    defect = _defect("x [CWE-20]")
    PostProcessor(rules=[rename]).apply(defect)
    assert seen == ["COMPILER_WARNING"]
    assert defect.def_class == "CUSTOM"
    # default rules replaced, not extended
    assert defect.cwe == 0


def test_empty_rule_set():
    defect = _defect("x [-Wanalyzer-leak]")
    PostProcessor(rules=()).apply(defect)
    assert defect.def_class == "COMPILER_WARNING"
