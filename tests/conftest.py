"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from defectlink.defects.models import DefEvent, Defect
from defectlink.parser.json_parser import JsonParser
from defectlink.source import InputDocument


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_parser(fixtures_dir: Path) -> Callable[..., JsonParser]:
    def _load(name: str, silent: bool = False) -> JsonParser:
        return JsonParser(InputDocument.from_path(fixtures_dir / name, silent=silent))

    return _load


@pytest.fixture
def parse_json() -> Callable[..., JsonParser]:
    """Parse an in-memory document given as JSON text or a Python value."""

    def _parse(doc, silent: bool = False, name: str = "test.json") -> JsonParser:
        text = doc if isinstance(doc, str) else json.dumps(doc)
        return JsonParser(InputDocument(name, text, silent=silent))

    return _parse


def make_defect(def_class: str, file_name: str, msg: str = "") -> Defect:
    return Defect(
        def_class=def_class,
        events=[DefEvent(event="error", file_name=file_name, line=1, msg=msg)],
    )


@pytest.fixture
def defect_factory() -> Callable[..., Defect]:
    return make_defect
