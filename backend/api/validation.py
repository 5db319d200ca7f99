"""Upload validation: passkey presence, PDF content type and payload size."""

import uuid

from fastapi import UploadFile

from api.errors import InvalidRequest, UnsupportedMediaType
from models import DEFAULT_CATEGORY

PDF_CONTENT_TYPE = "application/pdf"


def validate_passkey(passkey: str | None) -> str:
    """Return the passkey unchanged, or raise if it is missing or blank."""
    if passkey is None or not passkey.strip():
        raise InvalidRequest("Passkey is required")
    return passkey


def validate_content_type(content_type: str | None) -> str:
    if content_type != PDF_CONTENT_TYPE:
        raise UnsupportedMediaType()
    return content_type


async def read_upload(file: UploadFile | None, max_size: int) -> bytes:
    """Validate an uploaded file and return its bytes.

    The content type is checked before the body is read so rejected
    payloads never reach storage.

    Raises:
        InvalidRequest: No file, an empty file, or one larger than max_size.
        UnsupportedMediaType: The declared type is not PDF.
    """
    if file is None or not file.filename:
        raise InvalidRequest("No PDF file uploaded")

    validate_content_type(file.content_type)

    content = await file.read()
    if len(content) == 0:
        raise InvalidRequest("File is empty")
    if len(content) > max_size:
        raise InvalidRequest(f"File too large. Maximum size is {max_size} bytes.")
    return content


def normalize_category(category: str | None) -> str:
    if category is None or not category.strip():
        return DEFAULT_CATEGORY
    return category.strip()


def parse_file_id(raw: str | None) -> uuid.UUID:
    """Parse a client-supplied file id, raising InvalidRequest if malformed."""
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise InvalidRequest("Invalid file id")
