from core.line import Line
from core.metadata import (
    TableTestMetadata,
    coerce_attempt_number,
    parse_attempt_number,
)
from core.title import TITLE_PREFIX, canonical_title, is_test_key
from core.table_test import TableTest
from core.errors import (
    TableTestError,
    SnapshotError,
    EmptyTableTestError,
    StoreUnavailableError,
)

__all__ = [
    "Line",
    "TableTestMetadata",
    "coerce_attempt_number",
    "parse_attempt_number",
    "TITLE_PREFIX",
    "canonical_title",
    "is_test_key",
    "TableTest",
    "TableTestError",
    "SnapshotError",
    "EmptyTableTestError",
    "StoreUnavailableError",
]
