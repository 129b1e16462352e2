"""
Document I/O: write an exported test to disk, read one back.

Export flow:
    TableTest → handler.render → <canonical title>.<ext> (UTF-8)

Import flow:
    file → format from the extension → handler.parse → TableTest
    (fresh line ids; see ``formats.html_document``)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from core.errors import EmptyTableTestError
from core.table_test import TableTest
import infrastructure.registrations  # noqa: F401  (side-effect: populates the registry)
from infrastructure.registry import ExportFormat, format_for_path, get_handler

logger = logging.getLogger(__name__)


def export_document(
    test: TableTest,
    directory: str | Path,
    fmt: ExportFormat = ExportFormat.HTML,
) -> Path:
    """
    Render *test* in *fmt* and write it into *directory*.

    The file is named after the canonical title.  Raises
    :class:`EmptyTableTestError` for a test without lines.
    """
    if test.is_empty():
        raise EmptyTableTestError("Nothing to export: the test has no lines")
    handler = get_handler(fmt)
    target = Path(directory) / handler.filename(test)
    target.write_text(handler.render(test), encoding="utf-8")
    logger.info("Exported %s (%d lines) to %s", test.canonical_title(), len(test), target)
    return target


def import_document(
    file_path: str | Path,
    *,
    into: Optional[TableTest] = None,
) -> TableTest:
    """
    Read a previously exported ``.html`` / ``.doc`` file.

    The format is chosen from the file extension; an unknown extension
    raises ``ValueError``.
    """
    path = Path(file_path)
    handler = get_handler(format_for_path(path))
    test = handler.parse(path.read_text(encoding="utf-8"), into=into)
    logger.info("Imported %s from %s (%d lines)", test.canonical_title(), path, len(test))
    return test
