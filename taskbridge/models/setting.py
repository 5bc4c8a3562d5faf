# taskbridge/models/setting.py
from sqlalchemy import Column, Integer, String, Enum
from taskbridge.database import Base
import enum


class SettingVisibility(str, enum.Enum):
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class SystemSetting(Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, index=True)
    setting_key = Column(String(64), unique=True, nullable=False, index=True)
    setting_value = Column(String, nullable=False)
    visibility = Column(Enum(SettingVisibility), nullable=False, default=SettingVisibility.PRIVATE)
