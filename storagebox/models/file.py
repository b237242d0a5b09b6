# storagebox/models/file.py
import enum
from datetime import datetime, timezone

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from storagebox.models.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class FileCategory(str, enum.Enum):
    DOCUMENT = "document"
    IMAGE = "image"
    VIDEO_OR_AUDIO = "video-or-audio"
    OTHER = "other"


class File(Base):
    __tablename__ = "files"
    __table_args__ = (
        Index("ix_files_owner_category_created", "owner_id", "category", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)          # Display name, renamable
    url = Column(String(1024), nullable=False)          # Public URL from the blob store
    storage_key = Column(String(1024), nullable=False)  # Object key in the blob store
    size = Column(BigInteger, nullable=False)           # Size in bytes, as confirmed by the blob store
    content_type = Column(String(255), nullable=False)
    category = Column(String(32), nullable=False)       # FileCategory value, fixed at upload
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Many files → one owner (User)
    owner = relationship("User", back_populates="files")
