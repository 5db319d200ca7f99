"""Uploaded submission model: the PDF payload plus its review metadata."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import LargeBinary, String, Text, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

DEFAULT_STATUS = "under_processing"
DEFAULT_CATEGORY = "Uncategorized"


class Submission(Base):
    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_STATUS)
    # Plaintext; compared by equality and shown to reviewers.
    passkey: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, default=DEFAULT_CATEGORY)
    feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
