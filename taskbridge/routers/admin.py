# taskbridge/routers/admin.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.models.user import Role
from taskbridge.schemas.audit_log import AuditLogOut
from taskbridge.schemas.setting import PlatformSettings, PublicSettings, SettingUpdate, SettingOut
from taskbridge.services import audit_service, settings_service
from taskbridge.utils.access import require_role
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.get("/public/settings", response_model=PublicSettings)
def get_public_settings(db: Session = Depends(get_db)):
    """Unauthenticated; only PUBLIC keys are exposed"""
    return settings_service.get_public_settings(db)


@router.get("/settings", response_model=PlatformSettings)
def get_settings(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Every signed-in user reads the full set; only admins write"""
    return settings_service.get_settings(db)


@router.post("/settings", response_model=SettingOut)
def update_setting(
    update: SettingUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    setting = settings_service.set_setting(db, current_user, update.setting_key, update.setting_value)
    return {
        "setting_key": setting.setting_key,
        "setting_value": settings_service.typed_value(setting),
        "visibility": setting.visibility,
    }


@router.get("/logs", response_model=List[AuditLogOut])
def get_audit_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(200, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    require_role(current_user, Role.ADMIN)
    return audit_service.list_entries(db, skip=skip, limit=limit)
