"""Path normalization used as the file-name key of the correlation queue."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass(frozen=True)
class PathRule:
    """One regex substitution applied to a path."""

    match: str
    replace: str = ""


DEFAULT_RULES: tuple[PathRule, ...] = (
    # rpmbuild tree: /builddir/build/BUILD/<pkg>-<ver>/src/x.c -> src/x.c
    PathRule(match=r"^/builddir/build/BUILD/[^/]+/"),
    PathRule(match=r"^\./"),
)


class PathFilter:
    """Deterministic ``path -> path`` normalizer built from ordered rules."""

    def __init__(self, rules: tuple[PathRule, ...] | list[PathRule] = DEFAULT_RULES) -> None:
        self.rules = tuple(rules)
        self._compiled = [(re.compile(r.match), r.replace) for r in self.rules]

    def __call__(self, path: str) -> str:
        for regex, replace in self._compiled:
            path = regex.sub(replace, path)
        return path


def load_path_filter(path: str | Path | None = None) -> PathFilter:
    """Default rules followed by the ones listed in a YAML file, if given."""
    if path is None:
        return PathFilter()
    text = Path(path).read_text(encoding="utf-8")
    return path_filter_from_string(text)


def path_filter_from_string(text: str) -> PathFilter:
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Path filter YAML must be a mapping")
    return PathFilter(DEFAULT_RULES + tuple(_parse_rules(data.get("path_filters", []))))


def _parse_rules(rules_data: list) -> list[PathRule]:
    rules: list[PathRule] = []
    for r in rules_data:
        if not isinstance(r, dict) or "match" not in r:
            raise ValueError(f"Path filter rule needs a 'match' key: {r!r}")
        try:
            re.compile(r["match"])
        except re.error as e:
            raise ValueError(f"Invalid path filter regex {r['match']!r}: {e}") from e
        rules.append(PathRule(match=r["match"], replace=str(r.get("replace", ""))))
    return rules
