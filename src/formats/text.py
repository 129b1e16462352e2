"""
Text importer: raw multi-line text → TableTest.

Format: one line of source text per table row.  The line break is the
only record separator and cannot be escaped, so a row can never hold a
line break.  Blank lines, including the one after a trailing break,
become rows with an empty source.
"""
from __future__ import annotations

from typing import Optional

from core.metadata import TableTestMetadata
from core.table_test import TableTest


LINE_BREAK = "\n"


def split_text(raw_text: str) -> list[str]:
    """Split *raw_text* into row sources.  ``\\r\\n`` counts as one break."""
    return raw_text.replace("\r\n", LINE_BREAK).split(LINE_BREAK)


def import_from_text(
    raw_text: str,
    metadata: Optional[TableTestMetadata] = None,
    *,
    into: Optional[TableTest] = None,
) -> TableTest:
    """
    Build a TableTest with one empty-target line per segment of *raw_text*.

    If *into* is given it is reset and repopulated (replace, not merge)
    and returned; otherwise a new TableTest is created.
    """
    test = into if into is not None else TableTest()
    test.reset()
    if metadata is not None:
        test.set_metadata(metadata)
    for source in split_text(raw_text):
        test.append(source, "")
    return test


def export_to_text(test: TableTest) -> str:
    """Join the source column back into plain text."""
    return LINE_BREAK.join(line.source for line in test.lines)
