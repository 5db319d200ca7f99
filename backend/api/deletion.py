"""Deletion endpoints: one submission (optionally passkey-gated) or all of them."""

import logging

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from api.errors import Forbidden, Internal, NotFound
from api.review import MessageResponse
from api.validation import parse_file_id
from store.submissions import StoreError, SubmissionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["deletion"])


class DeleteRequest(BaseModel):
    passkey: str | None = None


@router.delete("/delete-file/{file_id}", response_model=MessageResponse)
async def delete_file(
    file_id: str,
    body: DeleteRequest | None = Body(None),
    store: SubmissionStore = Depends(get_store),
):
    """Delete one submission.

    When the body carries a passkey the record is only removed if it
    matches the stored one.
    """
    parsed_id = parse_file_id(file_id)
    passkey = body.passkey if body is not None else None

    try:
        if passkey is not None:
            record = await store.find_by_id(parsed_id)
            if record is None:
                raise NotFound()
            if record.passkey != passkey:
                raise Forbidden()
        deleted = await store.delete(parsed_id)
    except StoreError:
        logger.exception("Error deleting file %s", parsed_id)
        raise Internal("Error deleting file")
    if deleted == 0:
        raise NotFound()

    logger.info("Deleted submission %s", parsed_id)
    return MessageResponse(message="File deleted successfully")


@router.delete("/delete-all-files", response_model=MessageResponse)
async def delete_all_files(store: SubmissionStore = Depends(get_store)):
    try:
        deleted = await store.delete_all()
    except StoreError:
        logger.exception("Error deleting all files")
        raise Internal("Error deleting files")
    if deleted == 0:
        raise NotFound("No files to delete")

    logger.warning("Deleted all %d submissions", deleted)
    return MessageResponse(message=f"{deleted} files deleted successfully")
