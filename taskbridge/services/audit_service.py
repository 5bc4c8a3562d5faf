# taskbridge/services/audit_service.py
"""
Append-only audit trail of privileged mutations.

``record`` only adds the entry to the caller's session so that it commits
(or rolls back) together with the mutation it describes.
"""

from typing import List
import logging

from sqlalchemy.orm import Session

from taskbridge.models import AuditLog, User

logger = logging.getLogger(__name__)


class AuditAction:
    """Audit action names"""
    TASK_CREATED = "TASK_CREATED"
    CLAIM_TASK = "CLAIM_TASK"
    START_TASK = "START_TASK"
    REJECT_TASK = "REJECT_TASK"
    COMPLETE_TASK = "COMPLETE_TASK"
    SELF_COMPLETE_TASK = "SELF_COMPLETE_TASK"
    REREQUEST_TASK = "REREQUEST_TASK"
    REASSIGN_TASK = "REASSIGN_TASK"
    RESOLVE_TASK = "RESOLVE_TASK"
    SET_BACKUP_ASSIGNEE = "SET_BACKUP_ASSIGNEE"
    SET_QUALITY_SCORE = "SET_QUALITY_SCORE"
    CREATE_USER = "CREATE_USER"
    DELETE_USER = "DELETE_USER"
    UPDATE_ROLE = "UPDATE_ROLE"
    SUSPEND_USER = "SUSPEND_USER"
    ACTIVATE_USER = "ACTIVATE_USER"
    UPDATE_AVAILABILITY = "UPDATE_AVAILABILITY"
    UPDATE_SETTING = "UPDATE_SETTING"
    PASSWORD_RESET = "PASSWORD_RESET"


def record(db: Session, action: str, performed_by: User, details: str = "") -> AuditLog:
    """Stage an audit entry in the current transaction"""
    entry = AuditLog(
        action=action,
        performed_by=performed_by.email,
        details=details,
    )
    db.add(entry)
    logger.debug("Audit %s by %s: %s", action, performed_by.email, details)
    return entry


def list_entries(db: Session, skip: int = 0, limit: int = 200) -> List[AuditLog]:
    """Newest first"""
    return (
        db.query(AuditLog)
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
