"""Identity directory and account administration."""

from datetime import timedelta

import pytest

from taskbridge.models import AuditLog, ChatMessage, Notification, Role, Task, User
from taskbridge.schemas.user import UserCreate
from taskbridge.services import message_service, task_service, user_service
from taskbridge.services.audit_service import AuditAction
from taskbridge.services.errors import AuthorizationError, NotFoundError, ValidationError
from taskbridge.utils.clock import utcnow
from taskbridge.utils.security import verify_password


def test_register_normalizes_email(db):
    user = user_service.register_user(
        db, UserCreate(name="Ada", email="Ada@Example.com", password="secret1", role=Role.MANAGER)
    )
    assert user.email == "ada@example.com"
    assert user.role == Role.MANAGER
    assert user_service.authenticate(db, "ADA@example.com", "secret1").id == user.id
    assert user_service.authenticate(db, "ada@example.com", "wrong") is None


def test_register_refuses_admin_role(db):
    with pytest.raises(ValidationError):
        user_service.register_user(db, UserCreate(name="Eve", email="eve@test.com", password="secret1", role=Role.ADMIN))


def test_register_refuses_duplicate_email(db, requester):
    with pytest.raises(ValidationError, match="already registered"):
        user_service.register_user(db, UserCreate(name="Dup", email="USER@test.com", password="secret1"))


def test_register_enforces_password_length(db):
    with pytest.raises(ValidationError):
        user_service.register_user(db, UserCreate(name="Short", email="short@test.com", password="123"))


def test_password_reset_flow(db, requester):
    code = user_service.request_password_reset(db, "user@test.com")
    assert len(code) == 6 and code.isdigit()

    with pytest.raises(ValidationError, match="Invalid OTP"):
        user_service.reset_password(db, "user@test.com", "not-it", "newpassword")

    user_service.reset_password(db, "user@test.com", code, "newpassword")

    db.refresh(requester)
    assert verify_password("newpassword", requester.hashed_password)
    assert requester.reset_code is None
    assert db.query(AuditLog).filter(AuditLog.action == AuditAction.PASSWORD_RESET).count() == 1


def test_expired_reset_code(db, requester):
    code = user_service.request_password_reset(db, "user@test.com")
    requester.reset_code_expiry = utcnow() - timedelta(minutes=1)
    db.commit()

    with pytest.raises(ValidationError, match="expired"):
        user_service.reset_password(db, "user@test.com", code, "newpassword")


def test_reset_for_unknown_email(db):
    with pytest.raises(NotFoundError):
        user_service.request_password_reset(db, "ghost@test.com")


def test_directory_is_for_admins_and_managers(db, admin, manager, requester):
    assert len(user_service.list_users(db, manager)) == 3
    with pytest.raises(AuthorizationError):
        user_service.list_users(db, requester)


def test_provision_user_is_audited(db, admin):
    user = user_service.provision_user(
        db, admin, UserCreate(name="Second Admin", email="root2@test.com", password="secret1", role=Role.ADMIN)
    )
    assert user.role == Role.ADMIN
    entry = db.query(AuditLog).filter(AuditLog.action == AuditAction.CREATE_USER).one()
    assert entry.performed_by == admin.email


def test_toggle_suspension(db, admin, manager):
    assert user_service.toggle_suspension(db, admin, manager.id).suspended is True
    assert user_service.toggle_suspension(db, admin, manager.id).suspended is False

    actions = [e.action for e in db.query(AuditLog).order_by(AuditLog.id)]
    assert actions == [AuditAction.SUSPEND_USER, AuditAction.ACTIVATE_USER]

    with pytest.raises(ValidationError):
        user_service.toggle_suspension(db, admin, admin.id)


def test_change_role_records_old_and_new(db, admin, requester):
    user_service.change_role(db, admin, requester.id, Role.MANAGER)

    entry = db.query(AuditLog).filter(AuditLog.action == AuditAction.UPDATE_ROLE).one()
    assert entry.details == "Updated user user@test.com from USER to MANAGER"


def test_cannot_demote_manager_with_active_work(db, admin, requester, manager, make_task):
    task = make_task(requester)
    task_service.claim_task(db, task.id, manager)

    with pytest.raises(ValidationError):
        user_service.change_role(db, admin, manager.id, Role.USER)


def test_delete_user_cleans_up(db, admin, make_user, manager, requester, make_task):
    backup = make_user("backup@test.com", Role.MANAGER)
    task = make_task(requester)
    task_service.claim_task(db, task.id, manager)
    task_service.start_task(db, task.id, manager)
    task_service.set_backup_assignee(db, task.id, manager, backup.id)
    message_service.send_message(db, backup, "hello")
    backup_id = backup.id

    user_service.delete_user(db, admin, backup_id)

    db.expire_all()
    assert db.get(User, backup_id) is None
    assert db.get(Task, task.id).backup_assignee is None
    assert db.query(Notification).filter(Notification.recipient == backup_id).count() == 0
    assert db.query(ChatMessage).count() == 0


def test_delete_refuses_admins_and_task_holders(db, admin, requester, make_task):
    make_task(requester)
    with pytest.raises(ValidationError):
        user_service.delete_user(db, admin, admin.id)
    with pytest.raises(ValidationError):
        user_service.delete_user(db, admin, requester.id)


def test_availability_is_for_managers(db, manager, requester):
    user = user_service.set_availability(db, manager, False, "On leave until Monday")
    assert user.available is False
    assert user.availability_status == "On leave until Monday"

    with pytest.raises(AuthorizationError):
        user_service.set_availability(db, requester, False)


def test_admin_cannot_change_own_role(db, admin):
    with pytest.raises(ValidationError):
        user_service.change_role(db, admin, admin.id, Role.USER)

    db.refresh(admin)
    assert admin.role == Role.ADMIN
    assert db.query(AuditLog).filter(AuditLog.action == AuditAction.UPDATE_ROLE).count() == 0


def test_employees_are_requester_accounts(db, admin, manager, requester, make_user):
    second = make_user("second@test.com")

    employees = user_service.list_employees(db, manager)

    assert [u.id for u in employees] == [requester.id, second.id]
    with pytest.raises(AuthorizationError):
        user_service.list_employees(db, requester)
