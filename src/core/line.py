"""
Line: one source/target pair of a table test.

Lines are created by :class:`~core.table_test.TableTest`, which allocates
``line_id``.  The id never changes afterwards; ``source`` and ``target``
are edited in place.
"""
from __future__ import annotations


class Line:
    """A single row of the test table.

    Attributes:
        line_id: Integer id, unique within the owning test.  Read-only.
        source:  Text in the original language.
        target:  Translated text (may be empty).

    Two lines are equal when ``(line_id, source, target)`` are all equal,
    so identical text under different ids is still two distinct lines.
    """
    __slots__ = ("_line_id", "source", "target")

    def __init__(self, line_id: int, source: str = "", target: str = "") -> None:
        self._line_id = line_id
        self.source = source
        self.target = target

    @property
    def line_id(self) -> int:
        return self._line_id

    def copy(self) -> Line:
        return Line(self._line_id, self.source, self.target)

    def as_tuple(self) -> tuple[int, str, str]:
        return (self._line_id, self.source, self.target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Line(line_id={self._line_id!r}, source={self.source!r}, target={self.target!r})"
