# taskbridge/schemas/setting.py
from typing import Any, Optional
from pydantic import Field

from taskbridge.models.setting import SettingVisibility
from taskbridge.models.task import TaskPriority
from taskbridge.schemas.common import CamelModel


class PlatformSettings(CamelModel):
    """Typed view over the settings store. Field defaults apply to unset keys."""

    platform_name: str = "TaskBridge"
    maintenance_mode: bool = False
    default_priority: TaskPriority = TaskPriority.MEDIUM
    require_mfa: bool = Field(False, alias="requireMFA")
    auto_archive: bool = False


class PublicSettings(CamelModel):
    platform_name: str
    maintenance_mode: bool


class SettingUpdate(CamelModel):
    setting_key: str
    setting_value: Optional[Any] = None


class SettingOut(CamelModel):
    setting_key: str
    setting_value: Any
    visibility: SettingVisibility
