"""Review endpoints: set status, attach feedback, read feedback back by passkey."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.errors import Forbidden, Internal, InvalidRequest, NotFound
from api.validation import parse_file_id
from store.submissions import StoreError, SubmissionStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["review"])

NO_FEEDBACK_YET = "No feedback provided yet."


class StatusUpdateRequest(BaseModel):
    id: str | None = None
    status: str | None = None


class FeedbackRequest(BaseModel):
    id: str | None = None
    feedback: str | None = None


class GetFeedbackRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    file_id: str | None = None
    passkey: str | None = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class FeedbackResponse(BaseModel):
    success: bool = True
    feedback: str


async def _set_review_field(
    store: SubmissionStore, raw_id: str | None, field: str, value: str | None
) -> None:
    if not raw_id or not value:
        raise InvalidRequest("Missing parameters")
    file_id = parse_file_id(raw_id)

    try:
        matched = await store.update_field(file_id, field, value)
    except StoreError:
        logger.exception("Error updating %s for %s", field, file_id)
        raise Internal(f"Error updating {field}")
    if matched == 0:
        raise NotFound(f"File not found or {field} not updated")

    logger.info("Updated %s for submission %s", field, file_id)


@router.post("/update-status", response_model=MessageResponse)
async def update_status(
    body: StatusUpdateRequest, store: SubmissionStore = Depends(get_store)
):
    """Overwrite a submission's status. Any non-empty string is accepted."""
    await _set_review_field(store, body.id, "status", body.status)
    return MessageResponse(message="Status updated successfully")


@router.post("/submit-feedback", response_model=MessageResponse)
async def submit_feedback(
    body: FeedbackRequest, store: SubmissionStore = Depends(get_store)
):
    await _set_review_field(store, body.id, "feedback", body.feedback)
    return MessageResponse(message="Feedback submitted successfully")


@router.post("/get-feedback", response_model=FeedbackResponse)
async def get_feedback(
    body: GetFeedbackRequest, store: SubmissionStore = Depends(get_store)
):
    """Return reviewer feedback to the submitter holding the matching passkey."""
    if not body.file_id or not body.passkey:
        raise InvalidRequest("Missing parameters")
    file_id = parse_file_id(body.file_id)

    try:
        record = await store.find_by_id(file_id)
    except StoreError:
        logger.exception("Error fetching feedback for %s", file_id)
        raise Internal("Error fetching feedback")
    if record is None:
        raise NotFound()
    if record.passkey != body.passkey:
        raise Forbidden()

    return FeedbackResponse(feedback=record.feedback or NO_FEEDBACK_YET)
