from formats import text
from formats import snapshot
from formats import html_document
from formats.text import import_from_text, export_to_text, split_text
from formats.snapshot import Snapshot, SNAPSHOT_VERSION
from formats.html_document import (
    FIELD_CANDIDATE_NAME,
    FIELD_ATTEMPT_NUMBER,
    FIELD_TITLE,
    to_document,
    from_document,
)

__all__ = [
    "text",
    "snapshot",
    "html_document",
    "import_from_text",
    "export_to_text",
    "split_text",
    "Snapshot",
    "SNAPSHOT_VERSION",
    "FIELD_CANDIDATE_NAME",
    "FIELD_ATTEMPT_NUMBER",
    "FIELD_TITLE",
    "to_document",
    "from_document",
]
