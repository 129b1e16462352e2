from infrastructure.registry import (
    ExportFormat,
    ExportFormatHandler,
    format_for_path,
    get_handler,
    register,
)
from infrastructure.store import KeyValueStore, MemoryStore, SqliteStore
from infrastructure.snapshot_repository import SnapshotRepository
from infrastructure.document_io import export_document, import_document

__all__ = [
    "ExportFormat",
    "ExportFormatHandler",
    "register",
    "get_handler",
    "format_for_path",
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "SnapshotRepository",
    "export_document",
    "import_document",
]
