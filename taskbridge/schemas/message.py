# taskbridge/schemas/message.py
from datetime import datetime
from typing import Optional

from taskbridge.schemas.common import CamelModel


class MessageCreate(CamelModel):
    content: Optional[str] = None


class MessageOut(CamelModel):
    id: int
    sender_id: Optional[int] = None
    receiver_id: Optional[int] = None
    content: str
    type: str
    timestamp: datetime
