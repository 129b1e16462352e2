"""
Registry: maps ExportFormat to the functions that write and read it.

Adding a new export format requires:
1. Add an enum value to ``ExportFormat``
2. Write the render / parse functions (see ``formats.html_document``)
3. Add one ``register()`` call in ``registrations.py``

``document_io`` and the service layer discover handlers through
``get_handler()``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from core.table_test import TableTest


class ExportFormat(Enum):
    """File formats a test can be exported to; values are the extensions."""
    HTML = "html"
    WORD = "doc"


@dataclass(frozen=True, slots=True)
class ExportFormatHandler:
    """Bundle of functions and naming rules for one export format.

    ``media_type`` is ``text/html`` for every format: the ``.doc``
    export is HTML that word processors accept, not a binary format.
    """
    extension: str
    media_type: str
    render: Callable[["TableTest"], str]
    parse: Callable[..., "TableTest"]  # (text, *, into=None)

    def filename(self, test: "TableTest") -> str:
        return f"{test.canonical_title()}{self.extension}"


_handlers: dict[ExportFormat, ExportFormatHandler] = {}


def register(fmt: ExportFormat, handler: ExportFormatHandler) -> None:
    """Register a handler for an export format.  Raises on duplicates."""
    if fmt in _handlers:
        raise ValueError(f"Handler already registered for {fmt!r}")
    _handlers[fmt] = handler


def get_handler(fmt: ExportFormat) -> ExportFormatHandler:
    """Look up the handler for an export format.  Raises on missing."""
    try:
        return _handlers[fmt]
    except KeyError:
        raise ValueError(
            f"No handler registered for {fmt!r}. "
            f"Did you forget to add a register() call in registrations.py?"
        ) from None


def format_for_path(path: "str | Path") -> ExportFormat:
    """Pick the export format from a file's extension.  Raises on unknown."""
    suffix = Path(path).suffix.lower()
    for fmt, handler in _handlers.items():
        if handler.extension == suffix:
            return fmt
    raise ValueError(f"No export format uses the extension {suffix!r}")
