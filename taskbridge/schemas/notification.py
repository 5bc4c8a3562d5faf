# taskbridge/schemas/notification.py
from datetime import datetime

from taskbridge.schemas.common import CamelModel


class NotificationOut(CamelModel):
    id: int
    recipient: int
    title: str
    message: str
    read: bool
    timestamp: datetime


class UnreadCount(CamelModel):
    unread_count: int


class MarkAllRead(CamelModel):
    message: str
    updated_count: int
