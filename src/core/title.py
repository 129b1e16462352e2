"""
Title rule: derive the canonical test name from metadata.

The canonical title doubles as the storage key and the export file
name, so every stored test key starts with ``TITLE_PREFIX``.
"""
from __future__ import annotations

from core.metadata import TableTestMetadata


TITLE_PREFIX = "SNKTEST"


def canonical_title(metadata: TableTestMetadata) -> str:
    """``SNKTEST_<candidate>_<title>_<attempt>``."""
    return (
        f"{TITLE_PREFIX}_{metadata.candidate_name}"
        f"_{metadata.title}_{metadata.attempt_number}"
    )


def is_test_key(key: str) -> bool:
    return key.startswith(TITLE_PREFIX)
