"""Canonical defect model — shared by every decoder and the correlation queue."""

from __future__ import annotations

from dataclasses import dataclass, field

UNKNOWN_FILE = "<unknown>"
UNKNOWN_MSG = "<unknown>"

# Scan-level metadata (tool name, version, ...); empty means "no properties"
ScanProps = dict[str, str]


@dataclass
class DefEvent:
    """One step in a defect's trace."""

    event: str = ""
    file_name: str = UNKNOWN_FILE
    line: int = 0
    column: int = 0
    msg: str = ""


@dataclass
class Defect:
    """A single finding: checker class plus an ordered trace of events.

    The first event is the key event; its file name is what the correlation
    queue files the defect under.
    """

    def_class: str = ""
    events: list[DefEvent] = field(default_factory=list)
    cwe: int = 0
    annotation: str = ""

    @property
    def key_event(self) -> DefEvent:
        return self.events[0]
