"""Tests for path normalization rules."""

from __future__ import annotations

import pytest

from defectlink.paths import PathFilter, PathRule, load_path_filter, path_filter_from_string


def test_default_rules():
    normalize = PathFilter()
    assert normalize("/builddir/build/BUILD/foo-1.0/src/a.c") == "src/a.c"
    assert normalize("./src/a.c") == "src/a.c"
    assert normalize("src/a.c") == "src/a.c"


def test_deterministic():
    normalize = PathFilter()
    path = "/builddir/build/BUILD/x/y.c"
    assert normalize(path) == normalize(path) == "y.c"


def test_no_rules_is_identity():
    assert PathFilter(())("./a.c") == "./a.c"


def test_load_from_yaml(fixtures_dir):
    normalize = load_path_filter(fixtures_dir / "path-filters.yaml")
    assert normalize("/src/a.c") == "src/a.c"
    # default rules still apply first
    assert normalize("./a.c") == "a.c"


def test_load_none_gives_defaults():
    assert load_path_filter(None).rules == PathFilter().rules


def test_backreference():
    normalize = PathFilter((PathRule(match=r"^(\w+)-[0-9.]+/", replace=r"\1/"),))
    assert normalize("foo-1.2/a.c") == "foo/a.c"


def test_invalid_yaml():
    with pytest.raises(ValueError, match="mapping"):
        path_filter_from_string("just a string")


def test_rule_without_match():
    with pytest.raises(ValueError, match="match"):
        path_filter_from_string("path_filters:\n  - replace: x\n")


def test_bad_regex():
    with pytest.raises(ValueError, match="Invalid"):
        path_filter_from_string("path_filters:\n  - match: '('\n")
