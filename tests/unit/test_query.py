"""Tests for the query stream parser."""

from __future__ import annotations

import io

import pytest

from defectlink.correlate.query import Query, QueryParser


def test_parse_lines():
    parser = QueryParser(["10,X,a.c\n", "11,Y,b.c,extra,fields\n"])
    assert list(parser) == [Query(10, "X", "a.c"), Query(11, "Y", "b.c")]
    assert not parser.has_error()


def test_bad_identifier_is_skipped(caplog):
    parser = QueryParser(["not-an-int,CLASS,file.c\n", "5,CLASS,file.c\n"])
    query = parser.next()
    assert query == Query(5, "CLASS", "file.c")
    assert parser.has_error()
    assert "-:1: error: failed to parse the identifier" in caplog.text


def test_too_few_fields(caplog):
    parser = QueryParser(io.StringIO("1,X\n\n2,Y,z.c\n"), name="ids.txt")
    assert list(parser) == [Query(2, "Y", "z.c")]
    assert parser.has_error()
    assert "ids.txt:1: error: not enough ','" in caplog.text
    assert "ids.txt:2: error: not enough ','" in caplog.text


def test_end_of_stream():
    parser = QueryParser([])
    assert parser.next() is None
    assert parser.next() is None
    assert not parser.has_error()


def test_crlf_and_empty_file_name():
    parser = QueryParser(["7,X,\r\n"])
    assert parser.next() == Query(7, "X", "")
    assert parser.lineno == 1


@pytest.mark.parametrize("field", [" 7 ", "1_000", "٣", "7.0", ""])
def test_identifier_must_be_plain_decimal(field):
    parser = QueryParser([f"{field},X,f\n", "-3,X,f\n"])
    assert list(parser) == [Query(-3, "X", "f")]
    assert parser.has_error()
