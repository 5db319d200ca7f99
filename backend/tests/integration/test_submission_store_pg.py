"""Integration tests for store.submissions (requires PostgreSQL).

Marked as integration; auto-skipped if vcconnect_test DB is unavailable.
"""

import asyncio

import pytest

from store.submissions import PasskeyInUseError, SubmissionStore

pytestmark = pytest.mark.integration

PDF = b"%PDF-1.7 integration"


async def _insert(session, passkey: str):
    return await SubmissionStore(session).insert(
        filename="cv.pdf",
        content_type="application/pdf",
        data=PDF,
        passkey=passkey,
        category="CS",
    )


class TestInsert:
    async def test_roundtrip_bytes(self, pg_session):
        file_id = await _insert(pg_session, "pg-roundtrip")
        record = await SubmissionStore(pg_session).find_by_id(file_id)
        assert bytes(record.data) == PDF
        assert record.uploaded_at.tzinfo is not None

    async def test_unique_passkey(self, pg_session):
        await _insert(pg_session, "pg-dup")
        with pytest.raises(PasskeyInUseError):
            await _insert(pg_session, "pg-dup")


class TestConcurrentInsert:
    async def test_same_passkey_only_one_wins(self, pg_session_factory, pg_session):
        """Two sessions racing on one passkey leave a single record."""

        async def attempt():
            async with pg_session_factory() as session:
                try:
                    await _insert(session, "pg-race")
                    return True
                except PasskeyInUseError:
                    return False

        outcomes = await asyncio.gather(attempt(), attempt())
        assert sorted(outcomes) == [False, True]
        assert len(await SubmissionStore(pg_session).find_all()) == 1
