"""Pydantic request and response schemas. JSON keys are camelCase."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- auth ---

class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserProfile(CamelModel):
    """Client-facing view of a user; never carries the password hash."""
    id: int
    name: str
    email: str


class LoginResponse(CamelModel):
    user: UserProfile


class MessageResponse(CamelModel):
    message: str


# --- files ---

class FileRecord(CamelModel):
    id: int
    name: str
    url: str
    size: int
    content_type: str
    category: str
    created_at: datetime
    updated_at: datetime


class FileSummary(CamelModel):
    id: int
    name: str
    url: str
    size: int
    date: datetime


class RenameRequest(CamelModel):
    new_name: Optional[str] = None


class RenameResponse(CamelModel):
    message: str
    file: FileRecord


# --- dashboard ---

class StorageUsage(CamelModel):
    total: int
    used: float
    used_percentage: int


class CategorySummary(CamelModel):
    files: int
    date: Optional[datetime] = None


class RecentFile(CamelModel):
    id: int
    name: str
    date: datetime


class DashboardView(CamelModel):
    storage: StorageUsage
    documents: CategorySummary
    images: CategorySummary
    videos: CategorySummary
    others: CategorySummary
    recent: List[RecentFile]
