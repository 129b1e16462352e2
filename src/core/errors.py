"""
Base error hierarchy for the table-test system.

All errors raised by the codecs, stores and service layer inherit from
``TableTestError`` so callers can catch a single base type.  Mutations
on a ``TableTest`` never raise for unknown line ids; they are no-ops.
"""
from __future__ import annotations



class TableTestError(Exception):
    """Base class for all table-test errors."""


class SnapshotError(TableTestError):
    """Raised when a stored snapshot cannot be restored faithfully."""


class EmptyTableTestError(TableTestError):
    """Raised when saving or exporting a test that has no lines."""


class StoreUnavailableError(TableTestError):
    """Raised when the persistent key-value store cannot be used."""
