"""Upload coordination between the bucket and the ``files`` table.

The object is written first and the metadata row second. If the insert
fails the object stays in the bucket with no row pointing at it; this is
logged as an orphan and left for out-of-band reconciliation.
"""
import logging
import time
import uuid
from typing import BinaryIO

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imgupper.core.exceptions import NotFoundError, PersistenceError
from imgupper.files.models import StoredFile
from imgupper.storage.client import ObjectStorage
from imgupper.users.service import user_exists

logger = logging.getLogger(__name__)


def file_extension(filename: str) -> str:
    """Text after the last dot, with the dot; empty when there is none."""
    _, dot, ext = filename.rpartition(".")
    return f".{ext}" if dot else ""


def build_object_key(user_id: int, filename: str) -> str:
    return f"u/{user_id}/uploads/{uuid.uuid4()}-{int(time.time())}{file_extension(filename)}"


async def upload_file(
    db: AsyncSession,
    storage: ObjectStorage,
    *,
    user_id: int,
    stream: BinaryIO,
    filename: str,
    size: int,
    content_type: str,
    public_base_url: str,
) -> StoredFile:
    if not await user_exists(db, user_id):
        raise NotFoundError("user not found")
    # Release the connection; nothing is held while the object is written
    await db.commit()

    key = build_object_key(user_id, filename)
    await storage.put_object(key, stream, content_type, public_read=True)

    record = StoredFile(
        user_id=user_id,
        filename=filename,
        filesize=size,
        mime_type=content_type,
        bucket_url=public_base_url + key,
    )
    db.add(record)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(
            "orphaned object bucket=%s key=%s user_id=%s: metadata insert failed: %s",
            storage.bucket_name,
            key,
            user_id,
            exc,
        )
        raise PersistenceError("failed to create file record", detail=str(exc)) from exc
    await db.refresh(record)
    logger.info("stored file id=%s key=%s", record.id, key)
    return record


async def list_files_for_user(db: AsyncSession, user_id: int) -> list[StoredFile]:
    result = await db.execute(
        select(StoredFile)
        .where(StoredFile.user_id == user_id)
        .order_by(StoredFile.created_at.desc(), StoredFile.id.desc())
    )
    return list(result.scalars().all())


async def get_file(db: AsyncSession, file_id: int) -> StoredFile:
    result = await db.execute(select(StoredFile).where(StoredFile.id == file_id))
    record = result.scalar_one_or_none()
    if record is None:
        raise NotFoundError("file not found")
    return record
