"""
SnapshotRepository: saves and restores TableTests in a KeyValueStore.

Each test is stored as its snapshot JSON under ``canonical_title()``.
Listing only returns keys that start with ``TITLE_PREFIX``, so the store
may hold unrelated entries.
"""
from __future__ import annotations

import logging
from typing import Optional

from core.table_test import TableTest
from core.title import is_test_key
from formats import snapshot
from infrastructure.store import KeyValueStore

logger = logging.getLogger(__name__)


class SnapshotRepository:

    def __init__(self, store: KeyValueStore):
        self._store = store

    def save(self, test: TableTest) -> str:
        """Store *test* under its canonical title and return the key."""
        key = test.canonical_title()
        self._store.set(key, snapshot.to_json(test))
        logger.info("Saved %s (%d lines)", key, len(test))
        return key

    def load(self, key: str, *, into: Optional[TableTest] = None) -> TableTest:
        """Restore the test stored under *key*.  Raises KeyError if absent."""
        value = self._store.get(key)
        if value is None:
            raise KeyError(key)
        test = snapshot.from_json(value, into=into)
        logger.info("Loaded %s (%d lines)", key, len(test))
        return test

    def exists(self, key: str) -> bool:
        return self._store.get(key) is not None

    def delete(self, key: str) -> None:
        self._store.delete(key)
        logger.info("Deleted %s", key)

    def list_keys(self) -> list[str]:
        return sorted(key for key in self._store.keys() if is_test_key(key))
