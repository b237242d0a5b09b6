import math
from typing import Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from storagebox.schemas import CategorySummary, DashboardView, RecentFile, StorageUsage
from storagebox.models.file import File, FileCategory

BYTES_PER_GB = 1024 ** 3
RECENT_FILES_LIMIT = 5


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def storage_usage(total_used_bytes: int, quota_gb: int) -> StorageUsage:
    used_gb = _round_half_up(total_used_bytes / BYTES_PER_GB, 2)
    used_percentage = int(_round_half_up(used_gb / quota_gb * 100)) if quota_gb else 0
    return StorageUsage(total=quota_gb, used=used_gb, used_percentage=used_percentage)


def summarize(db: Session, user_id: int, quota_gb: int) -> DashboardView:
    owned = db.query(File).filter(File.owner_id == user_id)

    total_used_bytes = owned.with_entities(func.sum(File.size)).scalar() or 0

    per_category: Dict[str, CategorySummary] = {}
    rows = (
        owned.with_entities(File.category, func.count(File.id), func.max(File.created_at))
        .group_by(File.category)
        .all()
    )
    for category, count, latest in rows:
        per_category[category] = CategorySummary(files=count, date=latest)

    def category_summary(category: FileCategory) -> CategorySummary:
        return per_category.get(category.value, CategorySummary(files=0, date=None))

    recent = (
        owned.order_by(File.created_at.desc(), File.id.desc())
        .limit(RECENT_FILES_LIMIT)
        .all()
    )

    return DashboardView(
        storage=storage_usage(total_used_bytes, quota_gb),
        documents=category_summary(FileCategory.DOCUMENT),
        images=category_summary(FileCategory.IMAGE),
        videos=category_summary(FileCategory.VIDEO_OR_AUDIO),
        others=category_summary(FileCategory.OTHER),
        recent=[RecentFile(id=f.id, name=f.name, date=f.created_at) for f in recent],
    )
