# taskbridge/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.schemas.analytics import AdminOverview, UserSummary
from taskbridge.services import analytics
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.get("/admin", response_model=AdminOverview)
def get_admin_overview(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return analytics.admin_overview(db, current_user)


@router.get("/summary", response_model=UserSummary)
def get_user_summary(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Counts over the caller's own requests"""
    return analytics.user_summary(db, current_user)


@router.get("/heatmap", response_model=Dict[str, int])
def get_heatmap(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return analytics.heatmap_for(db, current_user)
