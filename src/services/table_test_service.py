"""
TableTestService: the bridge between the API layer and the core domain.

Manages:
- Open tests (keyed by a test_id string), one TableTest per open test
- The snapshot repository (save / load / list against a KeyValueStore)
- Export / import through the export-format registry

Each open test has exactly one owner: this service.  Loading or
resetting replaces that test's state wholesale; nothing is shared
between test ids.

Lines are addressed by their ``line_id``.  Edits to an unknown line id
are no-ops, as in the core; an unknown ``test_id`` raises ``KeyError``.
"""
from __future__ import annotations

import logging
from typing import Optional

from core import (
    EmptyTableTestError,
    Line,
    TableTest,
    TableTestMetadata,
    parse_attempt_number,
)
from formats import import_from_text
from infrastructure import ExportFormat, KeyValueStore, SnapshotRepository, get_handler
import infrastructure.registrations  # noqa: F401  (side-effect: populates the registry)

logger = logging.getLogger(__name__)


class TableTestService:
    """
    Facade that the API layer calls. One instance per application.
    """

    def __init__(self, store: KeyValueStore):
        self._repository = SnapshotRepository(store)
        self._tests: dict[str, TableTest] = {}

    # ------------------------------------------------------------------
    # Test lifecycle
    # ------------------------------------------------------------------

    def create(
        self,
        test_id: str,
        raw_text: str,
        *,
        title: str = "",
        candidate_name: str = "",
        attempt_number: str | int = 1,
        title_as_first_line: bool = False,
    ) -> dict:
        """
        Build a new test from pasted text and return its summary.

        *attempt_number* may be the raw text of a form field.  With
        *title_as_first_line* the source title becomes the first row,
        followed by the text.  An existing test under *test_id* is
        replaced.
        """
        metadata = TableTestMetadata(
            title=title,
            candidate_name=candidate_name,
            attempt_number=parse_attempt_number(attempt_number),
        )
        text = f"{title}\n{raw_text}" if title_as_first_line else raw_text
        test = import_from_text(text, metadata)
        self._tests[test_id] = test
        logger.info("Created test %s (%s): %d lines",
                    test_id, test.canonical_title(), len(test))
        return self.summary(test_id)

    def get_test(self, test_id: str) -> TableTest:
        return self._tests[test_id]

    def list_tests(self) -> list[dict]:
        return [self.summary(tid) for tid in self._tests]

    def close(self, test_id: str) -> None:
        """Forget an open test."""
        self._tests.pop(test_id, None)
        logger.info("Closed test %s", test_id)

    def reset(self, test_id: str) -> dict:
        """Abandon the current content of a test, keeping it open and empty."""
        self._tests[test_id].reset()
        logger.info("Reset test %s", test_id)
        return self.summary(test_id)

    def summary(self, test_id: str) -> dict:
        test = self._tests[test_id]
        meta = test.metadata
        return {
            "test_id": test_id,
            "canonical_title": test.canonical_title(),
            "title": meta.title,
            "candidate_name": meta.candidate_name,
            "attempt_number": meta.attempt_number,
            "line_count": len(test),
        }

    # ------------------------------------------------------------------
    # Line access / edits
    # ------------------------------------------------------------------

    def get_lines(self, test_id: str) -> list[dict]:
        return [_serialize_line(line) for line in self._tests[test_id].lines]

    def append_line(self, test_id: str, source: str = "", target: str = "") -> dict:
        line = self._tests[test_id].append(source, target)
        logger.debug("Test %s: appended line %d", test_id, line.line_id)
        return _serialize_line(line)

    def insert_line(
        self, test_id: str, index: int, source: str = "", target: str = "",
    ) -> dict:
        line = self._tests[test_id].insert_at(index, source, target)
        return _serialize_line(line)

    def update_line(
        self,
        test_id: str,
        line_id: int,
        *,
        source: Optional[str] = None,
        target: Optional[str] = None,
    ) -> Optional[dict]:
        """Edit a line; returns the updated line, or ``None`` if it does not exist."""
        test = self._tests[test_id]
        test.update_line(line_id, source=source, target=target)
        line = test.get_line(line_id)
        return _serialize_line(line) if line is not None else None

    def delete_line(self, test_id: str, line_id: int) -> bool:
        """Delete a line; returns whether it existed."""
        test = self._tests[test_id]
        existed = test.find_index_by_id(line_id) is not None
        test.delete_by_id(line_id)
        return existed

    def update_metadata(
        self,
        test_id: str,
        *,
        title: Optional[str] = None,
        candidate_name: Optional[str] = None,
        attempt_number: Optional[str | int] = None,
    ) -> dict:
        test = self._tests[test_id]
        if title is not None:
            test.set_title(title)
        if candidate_name is not None:
            test.set_candidate_name(candidate_name)
        if attempt_number is not None:
            test.set_attempt_number(parse_attempt_number(attempt_number))
        return self.summary(test_id)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, test_id: str) -> str:
        """Store the test's snapshot; returns the storage key."""
        test = self._tests[test_id]
        if test.is_empty():
            raise EmptyTableTestError("Nothing to save: the test has no lines")
        return self._repository.save(test)

    def load(self, test_id: str, key: str) -> dict:
        """Open the stored test *key* under *test_id*, replacing any open test."""
        test = self._tests.get(test_id)
        if test is None:
            test = TableTest()
        self._repository.load(key, into=test)
        self._tests[test_id] = test
        return self.summary(test_id)

    def list_saved(self) -> list[str]:
        return self._repository.list_keys()

    def delete_saved(self, key: str) -> None:
        if not self._repository.exists(key):
            raise KeyError(key)
        self._repository.delete(key)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def export(self, test_id: str, fmt: ExportFormat) -> tuple[str, str, str]:
        """Render a test for download: ``(filename, media_type, content)``."""
        test = self._tests[test_id]
        if test.is_empty():
            raise EmptyTableTestError("Nothing to export: the test has no lines")
        handler = get_handler(fmt)
        logger.info("Exporting test %s as %s", test_id, fmt.value)
        return handler.filename(test), handler.media_type, handler.render(test)

    def import_document(
        self,
        test_id: str,
        text: str,
        fmt: ExportFormat = ExportFormat.HTML,
    ) -> dict:
        """Open an exported document under *test_id*.  Line ids are reissued."""
        handler = get_handler(fmt)
        test = self._tests.get(test_id)
        if test is None:
            test = TableTest()
        handler.parse(text, into=test)
        self._tests[test_id] = test
        logger.info("Imported document into test %s: %d lines", test_id, len(test))
        return self.summary(test_id)


def _serialize_line(line: Line) -> dict:
    return {"line_id": line.line_id, "source": line.source, "target": line.target}
