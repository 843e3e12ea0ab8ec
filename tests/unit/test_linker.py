"""Tests for the linking run: matched, unmatched and unclaimed defects."""

from __future__ import annotations

import pytest

from defectlink.correlate.linker import DefectLinker, DocumentError
from defectlink.correlate.query import Query, QueryParser
from defectlink.paths import PathFilter


def _native(*entries):
    return {
        "defects": [
            {"checker": c, "events": [{"event": "e", "file_name": f, "message": m}]}
            for c, f, m in entries
        ]
    }


def test_single_match_is_clean(parse_json):
    parser = parse_json(_native(("X", "f", "")))
    report = DefectLinker().run(parser, QueryParser(["1,X,f\n"]))

    assert len(report.matched) == 1
    assert report.matched[0].query.identifier == 1
    assert report.matched[0].defect.def_class == "X"
    assert report.unmatched == []
    assert report.unclaimed == []
    assert report.clean


def test_fifo_assignment(parse_json):
    parser = parse_json(_native(("X", "f", "first"), ("X", "f", "second")))
    report = DefectLinker().run(parser, [Query(2, "X", "f"), Query(1, "X", "f")])

    assert [(m.query.identifier, m.defect.key_event.msg) for m in report.matched] == [
        (2, "first"),
        (1, "second"),
    ]
    assert report.clean


def test_unmatched_and_unclaimed_in_one_run(parse_json, caplog):
    parser = parse_json(_native(("X", "f", ""), ("Y", "g", "")), name="scan.json")
    report = DefectLinker().run(parser, QueryParser(["1,X,f\n", "2,Z,h\n"]))

    assert [q.identifier for q in report.unmatched] == [2]
    assert [d.def_class for d in report.unclaimed] == ["Y"]
    assert not report.clean
    assert "scan.json: warning: defect lookup failed, id = 2" in caplog.text
    assert "offset detected (1 unclaimed defects)" in caplog.text


def test_query_errors_make_run_unclean(parse_json):
    parser = parse_json(_native(("X", "f", "")))
    report = DefectLinker().run(parser, QueryParser(["bad,X,f\n", "1,X,f\n"]))

    assert len(report.matched) == 1
    assert report.query_error
    assert not report.clean


def test_record_errors_make_run_unclean(parse_json):
    parser = parse_json({"defects": [{"checker": "X"}]}, silent=True)
    report = DefectLinker().run(parser, [])
    assert report.parse_error
    assert not report.clean


def test_fatal_parse_error_aborts(parse_json):
    parser = parse_json("not json")
    with pytest.raises(DocumentError):
        DefectLinker().run(parser, [Query(1, "X", "f")])


def test_paths_are_normalized(load_parser, fixtures_dir):
    from defectlink.paths import load_path_filter

    normalize = load_path_filter(fixtures_dir / "path-filters.yaml")
    report = DefectLinker(normalize).run(
        load_parser("issues.json"),
        [Query(100, "NULL_RETURNS", "src/args.c"), Query(101, "DEADCODE", "/src/util.c")],
    )
    assert len(report.matched) == 2
    assert report.clean


def test_default_path_filter(load_parser):
    report = DefectLinker(PathFilter()).run(
        load_parser("native.json"),
        [Query(1, "CPPCHECK_WARNING", "src/main.c"), Query(2, "RESOURCE_LEAK", "./src/io.c")],
    )
    assert report.clean
    assert report.scan_props["tool"] == "csmock"


def test_empty_document_and_no_queries(parse_json):
    report = DefectLinker().run(parse_json({"defects": []}), [])
    assert report.clean
