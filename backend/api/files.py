"""File retrieval: metadata listing and inline PDF download by id or passkey."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.errors import Internal, NotFound
from api.validation import parse_file_id
from models import DEFAULT_CATEGORY, Submission
from store.submissions import StoreError, SubmissionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


class FileSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    filename: str
    status: str
    passkey: str
    feedback: str | None
    category: str
    uploaded_at: str | None


class FileListResponse(BaseModel):
    success: bool = True
    files: list[FileSummary]


@router.get("/get-files", response_model=FileListResponse)
async def get_files(store: SubmissionStore = Depends(get_store)):
    """List every submission without its payload."""
    try:
        rows = await store.find_all()
    except StoreError:
        logger.exception("Error fetching files")
        raise Internal("Error fetching files")

    return FileListResponse(
        files=[
            FileSummary(
                id=str(r.id),
                filename=r.filename,
                status=r.status,
                passkey=r.passkey,
                feedback=r.feedback,
                category=r.category or DEFAULT_CATEGORY,
                uploaded_at=r.uploaded_at.isoformat() if r.uploaded_at else None,
            )
            for r in rows
        ]
    )


@router.get("/file/passkey/{passkey:path}")
async def get_file_by_passkey(passkey: str, store: SubmissionStore = Depends(get_store)):
    """Serve the PDF uploaded with this passkey."""
    try:
        record = await store.find_by_passkey(passkey)
    except StoreError:
        logger.exception("Error fetching file by passkey")
        raise Internal("Error fetching file")
    return _inline_file(record)


@router.get("/file/{file_id}")
async def get_file_by_id(file_id: str, store: SubmissionStore = Depends(get_store)):
    """Serve a PDF by its id."""
    parsed_id = parse_file_id(file_id)
    try:
        record = await store.find_by_id(parsed_id)
    except StoreError:
        logger.exception("Error fetching file %s", file_id)
        raise Internal("Error fetching file")
    return _inline_file(record)


def _inline_file(record: Submission | None) -> Response:
    if record is None:
        raise NotFound()
    return Response(
        content=bytes(record.data),
        media_type=record.content_type,
        headers={"Content-Disposition": "inline"},
    )
