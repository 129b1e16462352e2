"""
Snapshot codec: loss-free TableTest ↔ structured record.

The snapshot carries every line's ``(id, source, target)`` in order,
the metadata and ``next_id``, so ``decode(encode(t)) == t`` for every
reachable state, including the effect of deleted ids on the counter.
Its JSON form is the value stored under ``canonical_title()`` in the
key-value store.

Decoding is all-or-nothing: malformed input raises
:class:`~core.errors.SnapshotError` and leaves any target untouched.
"""
from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, Optional

from core.errors import SnapshotError
from core.line import Line
from core.metadata import TableTestMetadata
from core.table_test import TableTest


SNAPSHOT_VERSION = 1


@dataclass(slots=True)
class Snapshot:
    """Flat, JSON-safe copy of a TableTest's full state."""
    version: int = SNAPSHOT_VERSION
    metadata: dict[str, Any] = field(default_factory=dict)
    next_id: int = 0
    lines: list[dict[str, Any]] = field(default_factory=list)


def encode(test: TableTest) -> Snapshot:
    meta = test.metadata
    return Snapshot(
        version=SNAPSHOT_VERSION,
        metadata={
            "title": meta.title,
            "candidate_name": meta.candidate_name,
            "attempt_number": meta.attempt_number,
        },
        next_id=test.next_id,
        lines=[
            {"id": line.line_id, "source": line.source, "target": line.target}
            for line in test.lines
        ],
    )


def decode(snapshot: Snapshot, *, into: Optional[TableTest] = None) -> TableTest:
    """Rebuild a TableTest from *snapshot*.

    With *into*, that instance's previous state is replaced wholesale
    (its cached title included) and it is returned.
    """
    if snapshot.version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {snapshot.version!r}")

    meta = snapshot.metadata
    metadata = TableTestMetadata(
        title=_require(meta, "title", str),
        candidate_name=_require(meta, "candidate_name", str),
        attempt_number=_require(meta, "attempt_number", int),
    )
    lines = [
        Line(
            _require(entry, "id", int),
            _require(entry, "source", str),
            _require(entry, "target", str),
        )
        for entry in snapshot.lines
    ]
    if not isinstance(snapshot.next_id, int) or isinstance(snapshot.next_id, bool):
        raise SnapshotError(f"next_id must be an integer, got {snapshot.next_id!r}")

    test = into if into is not None else TableTest()
    test.restore(lines, metadata, snapshot.next_id)
    return test


# ------------------------------------------------------------------
# Dict / JSON helpers
# ------------------------------------------------------------------

def to_dict(test: TableTest) -> dict:
    return dataclasses.asdict(encode(test))


def from_dict(fields: dict, *, into: Optional[TableTest] = None) -> TableTest:
    """Build a TableTest from the raw dict form of a snapshot."""
    if not isinstance(fields, dict):
        raise SnapshotError("Snapshot must be a JSON object")
    metadata = fields.get("metadata")
    lines = fields.get("lines")
    if not isinstance(metadata, dict):
        raise SnapshotError("Snapshot is missing its metadata object")
    if not isinstance(lines, list) or not all(isinstance(e, dict) for e in lines):
        raise SnapshotError("Snapshot lines must be a list of objects")
    if "next_id" not in fields:
        raise SnapshotError("Snapshot is missing next_id")
    snapshot = Snapshot(
        version=fields.get("version", SNAPSHOT_VERSION),
        metadata=metadata,
        next_id=fields["next_id"],
        lines=lines,
    )
    return decode(snapshot, into=into)


def to_json(test: TableTest) -> str:
    return json.dumps(to_dict(test), ensure_ascii=False)


def from_json(text: str, *, into: Optional[TableTest] = None) -> TableTest:
    try:
        fields = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    return from_dict(fields, into=into)


def _require(fields: dict, key: str, kind: type) -> Any:
    try:
        value = fields[key]
    except KeyError:
        raise SnapshotError(f"Snapshot field missing: {key!r}") from None
    # bool is an int subclass; a stored true/false is never a valid id
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SnapshotError(
            f"Snapshot field {key!r} must be {kind.__name__}, got {type(value).__name__}"
        )
    return value
