"""
Document codec: TableTest ↔ self-contained HTML document.

Export renders ``templates/table_test.html.j2``: a head with charset,
``<title>`` set to the canonical title and minimal table styling; a body
with the source title heading, three metadata fields tagged with the
well-known ids below, and one two-cell row per line.  The word variant
adds Office namespaces and a document-view directive so word processors
open the same HTML natively.

Import parses any HTML text:
    metadata ← text of the elements carrying the three field ids
    lines    ← every <tr> with exactly two <td>, in document order

Row ids in the document are never reused: imported lines get fresh ids
from the receiving TableTest, numbered after the highest row id found.
Ids do not survive an export/import cycle.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup
from jinja2 import Environment, FileSystemLoader

from core.metadata import TableTestMetadata, parse_attempt_number
from core.table_test import TableTest

logger = logging.getLogger(__name__)


FIELD_CANDIDATE_NAME = "candidate-name"
FIELD_ATTEMPT_NUMBER = "attempt-number"
FIELD_TITLE = "source-title"
TABLE_ID = "table-test"
ROW_ID_PREFIX = "line-"

HTML_EXTENSION = ".html"
WORD_EXTENSION = ".doc"

_TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
_TEMPLATE_NAME = "table_test.html.j2"
_ROW_ID_RE = re.compile(re.escape(ROW_ID_PREFIX) + r"(\d+)")

# Tags whose whitespace-only text is data; bs4 collapses it everywhere else
_DATA_TAGS = frozenset({"td", "span", "h1", "pre", "textarea"})

_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    newline_sequence="\n",
    autoescape=True,
)


# ------------------------------------------------------------------
# Export
# ------------------------------------------------------------------

def to_document(test: TableTest, *, word: bool = False) -> str:
    """Render *test* as HTML; ``word=True`` adds the word-processor markup."""
    template = _env.get_template(_TEMPLATE_NAME)
    return template.render(
        word=word,
        canonical_title=test.canonical_title(),
        metadata=test.metadata,
        field_ids={
            "candidate_name": FIELD_CANDIDATE_NAME,
            "attempt_number": FIELD_ATTEMPT_NUMBER,
            "title": FIELD_TITLE,
        },
        table_id=TABLE_ID,
        row_id_prefix=ROW_ID_PREFIX,
        lines=test.lines,
    )


# ------------------------------------------------------------------
# Import
# ------------------------------------------------------------------

def from_document(text: str, *, into: Optional[TableTest] = None) -> TableTest:
    """
    Rebuild a TableTest from an exported document.

    A missing metadata field falls back to its default (empty text, or
    attempt 1) and is logged as a warning.  Rows that do not hold exactly
    two ``<td>`` cells are skipped.  If *into* is given it is reset and
    repopulated; otherwise a new TableTest is returned.
    """
    soup = BeautifulSoup(text, "html.parser", preserve_whitespace_tags=_DATA_TAGS)

    metadata = TableTestMetadata(
        title=_field_text(soup, FIELD_TITLE),
        candidate_name=_field_text(soup, FIELD_CANDIDATE_NAME),
        attempt_number=parse_attempt_number(_field_text(soup, FIELD_ATTEMPT_NUMBER)),
    )

    rows = []
    skipped = 0
    for row in soup.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        if len(cells) != 2:
            skipped += 1
            continue
        rows.append((row, cells[0].get_text(), cells[1].get_text()))

    test = into if into is not None else TableTest()
    test.reset()
    test.set_metadata(metadata)
    # never hand out an id the document already used for a row
    baked_ids = [_row_id(row) for row, _, _ in rows]
    test.skip_ids_below(max((i + 1 for i in baked_ids if i is not None), default=0))
    for _, source, target in rows:
        test.append(source, target)

    logger.debug("Imported document %r: %d lines, %d rows skipped",
                 test.canonical_title(), len(test), skipped)
    return test


def _field_text(soup: BeautifulSoup, field_id: str) -> str:
    element = soup.find(id=field_id)
    if element is None:
        logger.warning("Document has no element with id %r; using default", field_id)
        return ""
    return element.get_text()


def _row_id(row) -> int | None:
    match = _ROW_ID_RE.fullmatch(row.get("id") or "")
    return int(match.group(1)) if match else None
