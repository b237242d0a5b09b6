from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storagebox.core.config import Settings
from storagebox.deps import AuthContext, get_auth_context, get_db, get_settings
from storagebox.schemas import DashboardView
from storagebox.services import dashboard

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
def get_dashboard(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return dashboard.summarize(db, auth.user_id, settings.storage_quota_gb)
