# taskbridge/services/user_service.py
"""Identity and role directory: accounts, roles, suspension, availability."""

from datetime import timedelta
from typing import List, Optional
import logging
import secrets

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskbridge.config.security import SecurityConfig
from taskbridge.models import User, Role, Task, TaskStatus, ChatMessage
from taskbridge.schemas.user import UserCreate
from taskbridge.services import audit_service
from taskbridge.services.audit_service import AuditAction
from taskbridge.services.errors import NotFoundError, ValidationError
from taskbridge.utils.access import require_role
from taskbridge.utils.clock import utcnow
from taskbridge.utils.security import hash_password, verify_password, generate_reset_code

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _validate_new_account(db: Session, data: UserCreate) -> None:
    if not data.name or not data.name.strip():
        raise ValidationError("Name is required")
    if len(data.password or "") < SecurityConfig.PASSWORDS['min_length']:
        raise ValidationError(
            f"Password must be at least {SecurityConfig.PASSWORDS['min_length']} characters"
        )
    if get_by_email(db, data.email):
        raise ValidationError("Email already registered")


def _create_account(db: Session, data: UserCreate) -> User:
    user = User(
        name=data.name.strip(),
        email=normalize_email(data.email),
        hashed_password=hash_password(data.password),
        role=data.role,
        suspended=False,
        available=True,
    )
    db.add(user)
    db.flush()
    return user


# ---------------------------------------------------------------------------
# Authentication boundary
# ---------------------------------------------------------------------------

def register_user(db: Session, data: UserCreate) -> User:
    """Self-service sign-up; administrators are only ever provisioned"""
    if not SecurityConfig.is_self_registration_role(data.role.value):
        raise ValidationError("Admin accounts can only be created by an administrator")
    _validate_new_account(db, data)
    user = _create_account(db, data)
    db.commit()
    db.refresh(user)
    logger.info("✅ Registered %s as %s", user.email, user.role.value)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def request_password_reset(db: Session, email: str) -> str:
    """Issue a one-time reset code. Delivery is the caller's concern."""
    email = normalize_email(email)
    if not email:
        raise ValidationError("Email cannot be empty")
    user = get_by_email(db, email)
    if not user:
        raise NotFoundError(f"User not found with email: {email}")

    code = generate_reset_code()
    user.reset_code = code
    user.reset_code_expiry = utcnow() + timedelta(minutes=SecurityConfig.PASSWORD_RESET['code_ttl_minutes'])
    db.commit()
    return code


def reset_password(db: Session, email: str, otp: str, new_password: str) -> User:
    email = normalize_email(email)
    if not email or not otp or not new_password:
        raise ValidationError("Email, OTP, and new password are required")
    if len(new_password) < SecurityConfig.PASSWORDS['min_length']:
        raise ValidationError(
            f"Password must be at least {SecurityConfig.PASSWORDS['min_length']} characters"
        )

    user = get_by_email(db, email)
    if not user:
        raise NotFoundError("User not found")
    if not user.reset_code or not secrets.compare_digest(user.reset_code, otp.strip()):
        raise ValidationError("Invalid OTP")
    if user.reset_code_expiry is None or user.reset_code_expiry < utcnow():
        raise ValidationError("OTP has expired")

    user.hashed_password = hash_password(new_password)
    user.reset_code = None
    user.reset_code_expiry = None
    audit_service.record(db, AuditAction.PASSWORD_RESET, user, f"Password reset for {user.email}")
    db.commit()
    db.refresh(user)
    return user


# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------

def list_users(db: Session, actor: User) -> List[User]:
    # Managers need the directory to pick backup assignees
    require_role(actor, Role.ADMIN, Role.MANAGER)
    return db.query(User).order_by(User.id).all()


def list_employees(db: Session, actor: User) -> List[User]:
    """Requester accounts only"""
    require_role(actor, Role.ADMIN, Role.MANAGER)
    return db.query(User).filter(User.role == Role.USER).order_by(User.id).all()


def provision_user(db: Session, admin: User, data: UserCreate) -> User:
    require_role(admin, Role.ADMIN)
    _validate_new_account(db, data)
    user = _create_account(db, data)
    audit_service.record(
        db, AuditAction.CREATE_USER, admin,
        f"Provisioned {user.email} as {user.role.value}"
    )
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, admin: User, user_id: int) -> None:
    require_role(admin, Role.ADMIN)
    user = _get_user(db, user_id)

    if user.role == Role.ADMIN:
        raise ValidationError("Admin accounts cannot be deleted")
    has_tasks = db.query(Task).filter(
        or_(Task.created_by == user.id, Task.assigned_to == user.id)
    ).first()
    if has_tasks:
        raise ValidationError("User still owns or is assigned tasks; reassign or resolve them first")

    db.query(Task).filter(Task.backup_assignee == user.id).update(
        {Task.backup_assignee: None}, synchronize_session=False
    )
    db.query(ChatMessage).filter(
        or_(ChatMessage.sender_id == user.id, ChatMessage.receiver_id == user.id)
    ).delete(synchronize_session=False)

    email = user.email
    db.delete(user)
    audit_service.record(db, AuditAction.DELETE_USER, admin, f"Deleted user {email}")
    db.commit()
    logger.info("🗑️ User %s deleted by %s", email, admin.email)


def toggle_suspension(db: Session, admin: User, user_id: int) -> User:
    require_role(admin, Role.ADMIN)
    user = _get_user(db, user_id)
    if user.id == admin.id:
        raise ValidationError("You cannot suspend your own account")

    user.suspended = not user.suspended
    audit_service.record(
        db,
        AuditAction.SUSPEND_USER if user.suspended else AuditAction.ACTIVATE_USER,
        admin,
        f"{'Suspended' if user.suspended else 'Activated'} user {user.email}",
    )
    db.commit()
    db.refresh(user)
    return user


def change_role(db: Session, admin: User, user_id: int, role: Role) -> User:
    require_role(admin, Role.ADMIN)
    user = _get_user(db, user_id)
    if user.id == admin.id:
        raise ValidationError("You cannot change your own role")
    old_role = user.role

    if old_role == Role.MANAGER and role != Role.MANAGER:
        active_work = db.query(Task).filter(
            Task.assigned_to == user.id,
            Task.status.in_([TaskStatus.PENDING, TaskStatus.IN_PROGRESS]),
        ).first()
        if active_work:
            raise ValidationError("Manager still has claimed or in-progress tasks")

    user.role = role
    audit_service.record(
        db, AuditAction.UPDATE_ROLE, admin,
        f"Updated user {user.email} from {old_role.value} to {role.value}"
    )
    db.commit()
    db.refresh(user)
    return user


def set_availability(
    db: Session,
    user: User,
    available: Optional[bool] = None,
    status_text: Optional[str] = None,
) -> User:
    """Managers toggle whether they are taking new work"""
    require_role(user, Role.MANAGER)
    if available is not None:
        user.available = available
    if status_text is not None:
        user.availability_status = status_text.strip() or None
    audit_service.record(
        db, AuditAction.UPDATE_AVAILABILITY, user,
        f"{user.email} is {'available' if user.available else 'unavailable'}"
    )
    db.commit()
    db.refresh(user)
    return user
