# taskbridge/services/settings_service.py
"""
Typed settings store.

Values are persisted as strings in ``system_settings`` but every read and
write goes through the schema in ``PlatformSettings``, so consumers receive
booleans and enums instead of coercing strings themselves.
"""

from typing import Any, Dict, Tuple
import logging

from pydantic import TypeAdapter, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from taskbridge.models import SystemSetting, SettingVisibility, User, Role
from taskbridge.schemas.setting import PlatformSettings, PublicSettings
from taskbridge.services import audit_service
from taskbridge.services.audit_service import AuditAction
from taskbridge.services.errors import ValidationError
from taskbridge.utils.access import require_role

logger = logging.getLogger(__name__)

# wire key -> (PlatformSettings field, visibility)
SETTING_KEYS: Dict[str, Tuple[str, SettingVisibility]] = {
    "platformName": ("platform_name", SettingVisibility.PUBLIC),
    "maintenanceMode": ("maintenance_mode", SettingVisibility.PUBLIC),
    "defaultPriority": ("default_priority", SettingVisibility.PRIVATE),
    "requireMFA": ("require_mfa", SettingVisibility.PRIVATE),
    "autoArchive": ("auto_archive", SettingVisibility.PRIVATE),
}


def _adapter(key: str) -> TypeAdapter:
    field_name, _ = SETTING_KEYS[key]
    return TypeAdapter(PlatformSettings.model_fields[field_name].annotation)


def _to_storage(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value"):
        return value.value
    return str(value)


def coerce_value(key: str, value: Any) -> Any:
    """Validate a raw value against the key's declared type"""
    if key not in SETTING_KEYS:
        raise ValidationError(f"Unknown setting: {key}")
    if value is None:
        raise ValidationError(f"A value is required for setting {key}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(f"A value is required for setting {key}")
    try:
        return _adapter(key).validate_python(value)
    except PydanticValidationError:
        raise ValidationError(f"Invalid value for setting {key}: {value!r}")


def get_settings(db: Session) -> PlatformSettings:
    """All settings, with defaults for keys that were never set"""
    values = {}
    for row in db.query(SystemSetting).all():
        if row.setting_key not in SETTING_KEYS:
            continue
        field_name, _ = SETTING_KEYS[row.setting_key]
        try:
            values[field_name] = _adapter(row.setting_key).validate_python(row.setting_value)
        except PydanticValidationError:
            logger.warning("Ignoring malformed stored value for %s: %r", row.setting_key, row.setting_value)
    return PlatformSettings(**values)


def get_public_settings(db: Session) -> PublicSettings:
    current = get_settings(db)
    return PublicSettings(
        platform_name=current.platform_name,
        maintenance_mode=current.maintenance_mode,
    )


def set_setting(db: Session, admin: User, key: str, value: Any) -> SystemSetting:
    """Admin-only upsert of a single setting"""
    require_role(admin, Role.ADMIN)
    typed = coerce_value(key, value)
    stored = _to_storage(typed)
    _, visibility = SETTING_KEYS[key]

    setting = db.query(SystemSetting).filter(SystemSetting.setting_key == key).first()
    if setting is None:
        setting = SystemSetting(setting_key=key, setting_value=stored, visibility=visibility)
        db.add(setting)
    else:
        setting.setting_value = stored
        setting.visibility = visibility

    audit_service.record(
        db, AuditAction.UPDATE_SETTING, admin,
        f"Updated system setting: {key} to {stored}"
    )
    db.commit()
    db.refresh(setting)

    logger.info("✅ Setting %s updated to %s by %s", key, stored, admin.email)
    return setting


def typed_value(setting: SystemSetting) -> Any:
    """Stored string of a known key decoded to its declared type"""
    return _adapter(setting.setting_key).validate_python(setting.setting_value)
