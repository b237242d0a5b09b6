import logging
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from storagebox.core.exceptions import DependencyError, NoFileError, NotFoundError, ValidationError
from storagebox.models.file import File, FileCategory
from storagebox.models.user import User
from storagebox.services.blob_store import S3BlobStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def classify(content_type: Optional[str]) -> FileCategory:
    mime = (content_type or "").lower()
    if mime.startswith("image/"):
        return FileCategory.IMAGE
    if mime.startswith("video/") or mime.startswith("audio/"):
        return FileCategory.VIDEO_OR_AUDIO
    if "pdf" in mime or "word" in mime or "excel" in mime:
        return FileCategory.DOCUMENT
    return FileCategory.OTHER


def _positive_int(value: Union[str, int, None], default: int) -> int:
    # integers only; "2.5" or "abc" fall back to the default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def parse_pagination(page: Union[str, int, None], limit: Union[str, int, None]):
    """Return ``(skip, limit)`` with lenient defaults for bad input."""
    page = _positive_int(page, DEFAULT_PAGE)
    limit = min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)
    return (page - 1) * limit, limit


def get_owned_file(db: Session, user_id: int, file_id: int) -> File:
    # another user's file id behaves as if it did not exist
    file = (
        db.query(File)
        .filter(File.id == file_id, File.owner_id == user_id)
        .first()
    )
    if not file:
        raise NotFoundError()
    return file


def upload(
    db: Session,
    blob_store: S3BlobStore,
    user_id: int,
    content: Optional[bytes],
    original_name: Optional[str],
    content_type: Optional[str],
) -> File:
    if content is None or not original_name:
        raise NoFileError()

    owner = db.get(User, user_id)
    if owner is None:
        raise NotFoundError("User not found")

    category = classify(content_type)
    stored = blob_store.put(user_id, original_name, content, content_type)

    file = File(
        owner_id=user_id,
        name=original_name,
        url=stored.url,
        storage_key=stored.key,
        size=stored.size,
        content_type=content_type or "application/octet-stream",
        category=category.value,
    )
    db.add(file)
    owner.total_storage_used = (owner.total_storage_used or 0) + stored.size
    try:
        db.commit()
    except Exception:
        db.rollback()
        _purge_blob(blob_store, stored.key)
        raise
    db.refresh(file)

    logger.info("User %s uploaded file %s (%d bytes, %s)", user_id, file.id, file.size, file.category)
    return file


def list_files(
    db: Session,
    user_id: int,
    category: FileCategory,
    page: Union[str, int, None] = None,
    limit: Union[str, int, None] = None,
) -> List[File]:
    skip, limit = parse_pagination(page, limit)
    return (
        db.query(File)
        .filter(File.owner_id == user_id, File.category == category.value)
        .order_by(File.created_at.desc(), File.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def rename(db: Session, user_id: int, file_id: int, new_name: Optional[str]) -> File:
    new_name = (new_name or "").strip()
    if not new_name:
        raise ValidationError("enter the name")

    file = get_owned_file(db, user_id, file_id)
    # Only the display name changes; the storage key stays the same
    file.name = new_name
    db.commit()
    db.refresh(file)
    return file


def delete(db: Session, blob_store: S3BlobStore, user_id: int, file_id: int) -> None:
    file = get_owned_file(db, user_id, file_id)
    storage_key, size = file.storage_key, file.size

    owner = db.get(User, user_id)
    if owner is not None:
        owner.total_storage_used = max((owner.total_storage_used or 0) - size, 0)
    db.delete(file)
    db.commit()

    # The record is the source of truth; a leftover object is only logged
    _purge_blob(blob_store, storage_key)
    logger.info("User %s deleted file %s", user_id, file_id)


def _purge_blob(blob_store: S3BlobStore, key: str) -> None:
    try:
        blob_store.delete(key)
    except DependencyError:
        logger.warning("Could not purge stored object %s", key, exc_info=True)
