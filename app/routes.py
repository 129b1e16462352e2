"""
API routes for the table-test builder.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel
from typing import Optional, Union
from urllib.parse import quote

from core import EmptyTableTestError, SnapshotError, StoreUnavailableError
from infrastructure import ExportFormat
from services.table_test_service import TableTestService


router = APIRouter(prefix="/api")

# Singleton service, created in main.py and attached here
_service: Optional[TableTestService] = None


def init_service(svc: TableTestService) -> None:
    global _service
    _service = svc


def svc() -> TableTestService:
    if _service is None:
        raise RuntimeError("TableTestService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class CreateRequest(BaseModel):
    test_id: str
    text: str
    title: str = ""
    candidate_name: str = ""
    attempt_number: Union[str, int] = "1"  # raw form value
    title_as_first_line: bool = False


class LineRequest(BaseModel):
    source: str = ""
    target: str = ""
    index: Optional[int] = None  # insert position; append when omitted


class LineUpdateRequest(BaseModel):
    source: Optional[str] = None
    target: Optional[str] = None


class MetadataRequest(BaseModel):
    title: Optional[str] = None
    candidate_name: Optional[str] = None
    attempt_number: Optional[Union[str, int]] = None


class LoadRequest(BaseModel):
    key: str


class ImportRequest(BaseModel):
    content: str
    format: str = "html"


# ------------------------------------------------------------------
# Tests
# ------------------------------------------------------------------

@router.post("/tests")
def create_test(req: CreateRequest):
    """Build a test from pasted text."""
    return svc().create(
        req.test_id, req.text,
        title=req.title,
        candidate_name=req.candidate_name,
        attempt_number=req.attempt_number,
        title_as_first_line=req.title_as_first_line,
    )


@router.get("/tests")
def list_tests():
    """List all open tests."""
    return svc().list_tests()


@router.get("/tests/{test_id}")
def get_test(test_id: str):
    """Summary and lines of an open test."""
    try:
        return {**svc().summary(test_id), "lines": svc().get_lines(test_id)}
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")


@router.delete("/tests/{test_id}")
def close_test(test_id: str):
    svc().close(test_id)
    return {"closed": test_id}


@router.post("/tests/{test_id}/reset")
def reset_test(test_id: str):
    try:
        return svc().reset(test_id)
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")


@router.put("/tests/{test_id}/metadata")
def update_metadata(test_id: str, req: MetadataRequest):
    try:
        return svc().update_metadata(
            test_id,
            title=req.title,
            candidate_name=req.candidate_name,
            attempt_number=req.attempt_number,
        )
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")


# ------------------------------------------------------------------
# Lines
# ------------------------------------------------------------------

@router.post("/tests/{test_id}/lines")
def add_line(test_id: str, req: LineRequest):
    """Append a line, or insert it before ``index``."""
    try:
        if req.index is None:
            return svc().append_line(test_id, req.source, req.target)
        return svc().insert_line(test_id, req.index, req.source, req.target)
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")


@router.put("/tests/{test_id}/lines/{line_id}")
def update_line(test_id: str, line_id: int, req: LineUpdateRequest):
    try:
        line = svc().update_line(test_id, line_id, source=req.source, target=req.target)
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")
    if line is None:
        raise HTTPException(404, f"Line not found: {line_id}")
    return line


@router.delete("/tests/{test_id}/lines/{line_id}")
def delete_line(test_id: str, line_id: int):
    try:
        return {"deleted": svc().delete_line(test_id, line_id)}
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")


# ------------------------------------------------------------------
# Local storage
# ------------------------------------------------------------------

@router.post("/tests/{test_id}/save")
def save_test(test_id: str):
    """Store the test snapshot under its canonical title."""
    try:
        return {"key": svc().save(test_id)}
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")
    except EmptyTableTestError as e:
        raise HTTPException(409, str(e))
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))


@router.post("/tests/{test_id}/load")
def load_test(test_id: str, req: LoadRequest):
    """Open a stored test under ``test_id``."""
    try:
        return svc().load(test_id, req.key)
    except KeyError:
        raise HTTPException(404, f"Saved test not found: {req.key}")
    except SnapshotError as e:
        raise HTTPException(422, str(e))
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))


@router.get("/saved")
def list_saved():
    try:
        return svc().list_saved()
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))


@router.delete("/saved/{key}")
def delete_saved(key: str):
    try:
        svc().delete_saved(key)
    except KeyError:
        raise HTTPException(404, f"Saved test not found: {key}")
    except StoreUnavailableError as e:
        raise HTTPException(503, str(e))
    return {"deleted": key}


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

@router.get("/tests/{test_id}/export/{fmt}")
def export_test(test_id: str, fmt: str):
    """Download the test as ``.html`` or ``.doc``."""
    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        raise HTTPException(400, f"Unknown export format: {fmt}")
    try:
        filename, media_type, content = svc().export(test_id, export_format)
    except KeyError:
        raise HTTPException(404, f"Test not found: {test_id}")
    except EmptyTableTestError as e:
        raise HTTPException(409, str(e))
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/tests/{test_id}/import")
def import_test(test_id: str, req: ImportRequest):
    """Open a previously exported document under ``test_id``."""
    try:
        export_format = ExportFormat(req.format)
    except ValueError:
        raise HTTPException(400, f"Unknown export format: {req.format}")
    return svc().import_document(test_id, req.content, export_format)
