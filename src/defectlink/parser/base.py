"""Tree decoder base — cursor over a document's records and typed field access."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from defectlink.defects.models import Defect, ScanProps

T = TypeVar("T", int, str)


class FormatError(ValueError):
    """The document cannot be decoded at all (fatal for that document)."""


class RecordError(ValueError):
    """A single record is malformed; the caller skips it and moves on."""


class NodeStatus(enum.Enum):
    """Outcome of decoding one record."""

    DECODED = "decoded"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class NodeResult:
    """Result of one ``read_node()`` step."""

    status: NodeStatus
    index: int
    defect: Defect | None = None
    reason: str = ""


def children(node: Any) -> Iterable[Any]:
    """Child nodes of an array, or the values of an object."""
    if isinstance(node, list):
        return node
    if isinstance(node, dict):
        return node.values()
    return ()


def find_child(node: Any, key: str) -> Any:
    """Return ``node[key]`` or ``None`` when ``node`` has no such child."""
    if isinstance(node, dict):
        return node.get(key)
    return None


def first_child(node: Any) -> Any:
    return next(iter(children(node)), None)


def value_of(node: Any, key: str, default: T) -> T:
    """Read ``node[key]`` coerced to the type of ``default``.

    Missing keys and JSON nulls yield ``default``.  Values that cannot be
    represented as the requested type raise :class:`RecordError`.
    """
    value = find_child(node, key)
    if value is None:
        return default

    if isinstance(default, int):
        if isinstance(value, bool):
            raise RecordError(f"{key}: expected a number, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise RecordError(f"{key}: expected a number, got {value!r}")

    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise RecordError(f"{key}: expected a string, got {type(value).__name__}")


def require_object(node: Any, what: str = "defect") -> dict[str, Any]:
    if not isinstance(node, dict):
        raise RecordError(f"{what} node is not a JSON object")
    return node


class TreeDecoder:
    """Common cursor logic shared by all format decoders.

    Subclasses set ``records_key`` (or override :meth:`iter_records`) and
    implement :meth:`decode`, which returns ``None`` to reject a record
    silently and raises :class:`RecordError` for a malformed one.
    """

    records_key = ""

    def __init__(self, root: Any) -> None:
        self._root = root
        self._cursor: Iterator[tuple[int, Any]] = enumerate(self.iter_records(root))

    def iter_records(self, root: Any) -> Iterable[Any]:
        records = find_child(root, self.records_key)
        if not isinstance(records, (list, dict)):
            raise FormatError(f"'{self.records_key}' is not a JSON array")
        return children(records)

    def read_scan_props(self) -> ScanProps:
        """Scan-level metadata; formats without any return an empty mapping."""
        return {}

    def decode(self, node: Any) -> Defect | None:
        raise NotImplementedError

    def read_node(self) -> NodeResult | None:
        """Decode the record under the cursor and advance; ``None`` at the end."""
        try:
            index, node = next(self._cursor)
        except StopIteration:
            return None

        try:
            defect = self.decode(node)
        except RecordError as e:
            return NodeResult(NodeStatus.FAILED, index, reason=str(e))

        if defect is None:
            return NodeResult(NodeStatus.REJECTED, index)
        if not defect.events:
            return NodeResult(NodeStatus.FAILED, index, reason="defect has no events")
        return NodeResult(NodeStatus.DECODED, index, defect=defect)
