"""Submission record store: insert, lookup, field updates and deletion."""

import uuid
from typing import Any

from fastapi import Depends
from sqlalchemy import Row, delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models import DEFAULT_CATEGORY, DEFAULT_STATUS, Submission, get_db

UPDATABLE_FIELDS = frozenset({"status", "feedback"})


class StoreError(Exception):
    """A storage operation failed; the session has been rolled back."""


class PasskeyInUseError(StoreError):
    """Insert rejected by the unique constraint on passkey."""


class SubmissionStore:
    """Record store bound to one database session.

    Every method commits its own work. Failures roll the session back and
    surface as StoreError so callers never see driver exceptions.
    """

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert(
        self,
        filename: str,
        content_type: str,
        data: bytes,
        passkey: str,
        category: str | None = None,
    ) -> uuid.UUID:
        """Store a new submission and return its generated id.

        Raises:
            PasskeyInUseError: Another record already holds this passkey.
            StoreError: Any other storage failure.
        """
        record = Submission(
            filename=filename,
            content_type=content_type,
            data=data,
            passkey=passkey,
            category=category or DEFAULT_CATEGORY,
            status=DEFAULT_STATUS,
            feedback=None,
        )
        self._db.add(record)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise PasskeyInUseError(str(e)) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError(str(e)) from e
        return record.id

    async def find_by_id(self, file_id: uuid.UUID) -> Submission | None:
        return await self._find_one(Submission.id == file_id)

    async def find_by_passkey(self, passkey: str) -> Submission | None:
        return await self._find_one(Submission.passkey == passkey)

    async def find_all(self) -> list[Row]:
        """Return metadata rows for every submission, oldest first.

        The payload column is never selected.
        """
        try:
            result = await self._db.execute(
                select(
                    Submission.id,
                    Submission.filename,
                    Submission.status,
                    Submission.passkey,
                    Submission.feedback,
                    Submission.category,
                    Submission.uploaded_at,
                ).order_by(Submission.uploaded_at.asc())
            )
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError(str(e)) from e
        return list(result.all())

    async def update_field(self, file_id: uuid.UUID, field: str, value: Any) -> int:
        """Set one review field on a record and return the matched row count."""
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"Field {field!r} cannot be updated")
        try:
            result = await self._db.execute(
                update(Submission).where(Submission.id == file_id).values({field: value})
            )
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError(str(e)) from e
        return result.rowcount

    async def delete(self, file_id: uuid.UUID) -> int:
        return await self._delete_where(Submission.id == file_id)

    async def delete_all(self) -> int:
        return await self._delete_where()

    async def _find_one(self, criterion) -> Submission | None:
        try:
            result = await self._db.execute(
                select(Submission)
                .where(criterion)
                .execution_options(populate_existing=True)
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError(str(e)) from e

    async def _delete_where(self, *criteria) -> int:
        stmt = delete(Submission)
        if criteria:
            stmt = stmt.where(*criteria)
        try:
            result = await self._db.execute(stmt)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise StoreError(str(e)) from e
        return result.rowcount


async def get_store(db: AsyncSession = Depends(get_db)) -> SubmissionStore:
    """FastAPI dependency that binds a SubmissionStore to the request session."""
    return SubmissionStore(db)
