# taskbridge/schemas/audit_log.py
from datetime import datetime
from typing import Optional

from taskbridge.schemas.common import CamelModel


class AuditLogOut(CamelModel):
    id: int
    timestamp: datetime
    action: str
    performed_by: str
    details: Optional[str] = None
