"""Submission upload endpoint: validate, check passkey, store the PDF."""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.errors import Conflict, Internal
from api.validation import normalize_category, read_upload, validate_passkey
from config import settings
from store.submissions import PasskeyInUseError, StoreError, SubmissionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["submissions"])


class SubmitResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    file_id: str


@router.post("/submit-form", response_model=SubmitResponse)
async def submit_form(
    resume: UploadFile | None = File(None),
    passkey: str | None = Form(None),
    category: str | None = Form(None),
    store: SubmissionStore = Depends(get_store),
):
    """Accept a PDF upload guarded by a caller-chosen passkey."""
    passkey = validate_passkey(passkey)

    try:
        existing = await store.find_by_passkey(passkey)
    except StoreError:
        logger.exception("Passkey lookup failed")
        raise Internal("File upload failed")
    if existing is not None:
        raise Conflict()

    content = await read_upload(resume, settings.max_upload_size)

    try:
        file_id = await store.insert(
            filename=resume.filename,
            content_type=resume.content_type,
            data=content,
            passkey=passkey,
            category=normalize_category(category),
        )
    except PasskeyInUseError:
        # Lost the race against a concurrent upload with the same passkey.
        raise Conflict()
    except StoreError:
        logger.exception("Error saving file '%s'", resume.filename)
        raise Internal("File upload failed")

    logger.info("Stored submission %s (%s, %d bytes)", file_id, resume.filename, len(content))
    return SubmitResponse(file_id=str(file_id))
