# taskbridge/services/task_service.py
"""
Task lifecycle state machine.

    PENDING --claim--> PENDING (assigned) --start--> IN_PROGRESS --complete--> COMPLETED
    PENDING --reject--> REJECTED --reassign--> PENDING
                                 --resolve--> COMPLETED
    PENDING (owner) --complete--> COMPLETED
    COMPLETED --rerequest--> PENDING (unassigned)

Each transition is one conditional UPDATE on the task row guarded by the
status (and assignment) the caller observed. If another request moved the
row first the UPDATE matches nothing and ConflictError is raised; nothing is
retried. The audit entry is written in the same transaction, notifications
afterwards on a best-effort basis.
"""

from typing import Dict, List, Optional
import logging

from sqlalchemy import update, or_
from sqlalchemy.orm import Session

from taskbridge.config.workflow import WorkflowConfig
from taskbridge.models import Task, TaskStatus, User, Role
from taskbridge.schemas.task import TaskCreate
from taskbridge.services import audit_service, settings_service
from taskbridge.services.audit_service import AuditAction
from taskbridge.services.board import build_board
from taskbridge.services.errors import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from taskbridge.services.notification_service import NotificationService
from taskbridge.utils.access import AccessScope, require_role
from taskbridge.utils.clock import utcnow

logger = logging.getLogger(__name__)

# Execution fields wiped when a task goes back to the open queue
_EXECUTION_RESET = {
    "assigned_to": None,
    "assigned_at": None,
    "started_at": None,
    "completed_at": None,
    "to_do_plan": None,
    "feedback": None,
    "completion_proof": None,
    "backup_assignee": None,
    "quality_score": None,
    "rejection_reason": None,
}


def _require_active(user: User) -> None:
    if user.suspended:
        raise AuthorizationError("Account has been suspended. Please contact administrator.")


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _apply(
    db: Session,
    task: Task,
    transition: str,
    expected_status: TaskStatus,
    values: Dict,
    *conditions,
    conflict_message: str = "Task was modified by another request. Refresh and try again.",
) -> None:
    """Compare-and-set the task row; stages the change without committing"""
    values = dict(values, updated_at=utcnow())
    result = db.execute(
        update(Task)
        .where(Task.id == task.id, Task.status == expected_status, *conditions)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        logger.info("Lost race on task %s during %s", task.id, transition)
        raise ConflictError(conflict_message)


def _commit(db: Session, task: Task) -> Task:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(task)
    return task


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def list_tasks(db: Session, user: User, status: Optional[TaskStatus] = None) -> List[Task]:
    """Tasks visible to the user, newest first"""
    query = AccessScope(db).visible_tasks(user)
    if status is not None:
        query = query.filter(Task.status == status)
    return query.order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_task(db: Session, user: User, task_id: int) -> Task:
    return AccessScope(db).get_visible_task(user, task_id)


def list_disputes(db: Session, admin: User) -> List[Task]:
    """Rejected tasks awaiting reassignment or resolution"""
    require_role(admin, Role.ADMIN)
    return list_tasks(db, admin, TaskStatus.REJECTED)


def get_board(db: Session, manager: User) -> Dict[str, List[Task]]:
    require_role(manager, Role.MANAGER)
    return build_board(list_tasks(db, manager), manager.id)


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def create_task(db: Session, owner: User, data: TaskCreate) -> Task:
    """Submit a new request into the open queue"""
    _require_active(owner)
    if _blank(data.title):
        raise ValidationError("Title is required")
    if _blank(data.description):
        raise ValidationError("Description is required")
    if data.deadline is None:
        raise ValidationError("Deadline is required")

    priority = data.priority or settings_service.get_settings(db).default_priority
    category = data.category.strip() if not _blank(data.category) else WorkflowConfig.DEFAULT_CATEGORY

    task = Task(
        title=data.title.strip(),
        description=data.description.strip(),
        category=category,
        priority=priority,
        deadline=data.deadline,
        status=TaskStatus.PENDING,
        created_by=owner.id,
        assigned_to=None,
    )
    try:
        db.add(task)
        db.flush()
        audit_service.record(
            db, AuditAction.TASK_CREATED, owner,
            f"Created task #{task.id} '{task.title}' ({priority.value})"
        )
    except Exception:
        db.rollback()
        raise
    _commit(db, task)

    logger.info("✅ Task created with ID: %s", task.id)
    NotificationService.task_created(db, task)
    return task


def claim_task(db: Session, task_id: int, manager: User, to_do_plan: Optional[str] = None) -> Task:
    """Take an unassigned task off the open queue into the manager's to-do column"""
    require_role(manager, Role.MANAGER)
    task = get_task(db, manager, task_id)

    if task.status != TaskStatus.PENDING:
        raise InvalidTransitionError("claim", f"Only pending tasks can be claimed (task is {task.status.value})")
    if task.assigned_to is not None:
        raise ConflictError("Task already taken")

    _apply(
        db, task, "claim", TaskStatus.PENDING,
        {
            "assigned_to": manager.id,
            "assigned_at": utcnow(),
            "to_do_plan": None if _blank(to_do_plan) else to_do_plan.strip(),
        },
        Task.assigned_to.is_(None),
        conflict_message="Task already taken",
    )
    audit_service.record(db, AuditAction.CLAIM_TASK, manager, f"Claimed task #{task.id} '{task.title}'")
    _commit(db, task)

    logger.info("✅ Task %s claimed by %s", task.id, manager.email)
    NotificationService.task_claimed(db, task, manager)
    return task


def start_task(db: Session, task_id: int, manager: User) -> Task:
    require_role(manager, Role.MANAGER)
    task = get_task(db, manager, task_id)

    if task.status != TaskStatus.PENDING:
        raise InvalidTransitionError("start", f"Only pending tasks can be started (task is {task.status.value})")
    if task.assigned_to != manager.id:
        raise InvalidTransitionError("start", "Only the assigned manager can start this task")

    _apply(
        db, task, "start", TaskStatus.PENDING,
        {"status": TaskStatus.IN_PROGRESS, "started_at": utcnow()},
        Task.assigned_to == manager.id,
    )
    audit_service.record(db, AuditAction.START_TASK, manager, f"Started task #{task.id} '{task.title}'")
    _commit(db, task)

    NotificationService.task_started(db, task, manager)
    return task


def reject_task(db: Session, task_id: int, manager: User, reason: Optional[str]) -> Task:
    """Decline an open task or dispute one's own claim. Raises a dispute for admins."""
    require_role(manager, Role.MANAGER)
    task = get_task(db, manager, task_id)

    if _blank(reason):
        raise ValidationError("A rejection reason is required")
    if task.status != TaskStatus.PENDING:
        raise InvalidTransitionError("reject", f"Only pending tasks can be rejected (task is {task.status.value})")
    if task.assigned_to is not None and task.assigned_to != manager.id:
        raise InvalidTransitionError("reject", "Task is assigned to another manager")

    _apply(
        db, task, "reject", TaskStatus.PENDING,
        {"status": TaskStatus.REJECTED, "rejection_reason": reason.strip()},
        or_(Task.assigned_to.is_(None), Task.assigned_to == manager.id),
    )
    audit_service.record(
        db, AuditAction.REJECT_TASK, manager,
        f"Rejected task #{task.id} '{task.title}': {reason.strip()}"
    )
    _commit(db, task)

    NotificationService.task_rejected(db, task)
    return task


def complete_task(
    db: Session,
    task_id: int,
    actor: User,
    feedback: Optional[str] = None,
    proof: Optional[str] = None,
) -> Task:
    """Finish a task.

    Two distinct edges share this entry point: the assignee closing an
    IN_PROGRESS task, and the requester marking their own PENDING request
    done (self-service confirmation). They are audited separately.
    """
    _require_active(actor)
    task = get_task(db, actor, task_id)

    values = {"status": TaskStatus.COMPLETED, "completed_at": utcnow()}
    if feedback is not None:
        values["feedback"] = feedback
    if proof is not None:
        values["completion_proof"] = proof

    if task.assigned_to == actor.id and task.status == TaskStatus.IN_PROGRESS:
        _apply(db, task, "complete", TaskStatus.IN_PROGRESS, values, Task.assigned_to == actor.id)
        audit_service.record(db, AuditAction.COMPLETE_TASK, actor, f"Completed task #{task.id} '{task.title}'")
    elif task.created_by == actor.id:
        if task.status != TaskStatus.PENDING:
            raise InvalidTransitionError(
                "complete", f"Requesters can only mark pending requests as done (task is {task.status.value})"
            )
        _apply(db, task, "complete", TaskStatus.PENDING, values, Task.created_by == actor.id)
        audit_service.record(
            db, AuditAction.SELF_COMPLETE_TASK, actor,
            f"Requester marked task #{task.id} '{task.title}' as done"
        )
    elif task.assigned_to == actor.id:
        raise InvalidTransitionError(
            "complete", f"Only in-progress tasks can be completed (task is {task.status.value})"
        )
    else:
        raise AuthorizationError()

    _commit(db, task)

    NotificationService.task_completed(db, task)
    return task


def rerequest_task(db: Session, task_id: int, owner: User) -> Task:
    """Send a completed request back to the open queue"""
    _require_active(owner)
    task = get_task(db, owner, task_id)

    if task.created_by != owner.id:
        raise AuthorizationError("Only the requester can re-request this task")
    if task.status != TaskStatus.COMPLETED:
        raise InvalidTransitionError(
            "rerequest", f"Only completed tasks can be re-requested (task is {task.status.value})"
        )

    _apply(db, task, "rerequest", TaskStatus.COMPLETED, dict(_EXECUTION_RESET, status=TaskStatus.PENDING))
    audit_service.record(db, AuditAction.REREQUEST_TASK, owner, f"Re-requested task #{task.id} '{task.title}'")
    _commit(db, task)

    NotificationService.task_rerequested(db, task)
    return task


def reassign_task(db: Session, task_id: int, admin: User, new_assignee_id: int) -> Task:
    """Settle a dispute by handing the task to another manager"""
    require_role(admin, Role.ADMIN)
    task = get_task(db, admin, task_id)

    if task.status != TaskStatus.REJECTED:
        raise InvalidTransitionError(
            "reassign", f"Only disputed (rejected) tasks can be reassigned (task is {task.status.value})"
        )

    assignee = db.query(User).filter(User.id == new_assignee_id).first()
    if not assignee:
        raise NotFoundError("Assignee not found")
    if assignee.role != Role.MANAGER or assignee.suspended:
        raise ValidationError("Tasks can only be assigned to active managers")

    old_assignee = task.assignee.email if task.assignee else "none"
    _apply(
        db, task, "reassign", TaskStatus.REJECTED,
        {
            "status": TaskStatus.PENDING,
            "assigned_to": assignee.id,
            "assigned_at": utcnow(),
            "started_at": None,
            "to_do_plan": None,
            "backup_assignee": None,
        },
    )
    audit_service.record(
        db, AuditAction.REASSIGN_TASK, admin,
        f"Reassigned task '{task.title}' from {old_assignee} to {assignee.email}"
    )
    _commit(db, task)

    NotificationService.task_reassigned(db, task)
    return task


def resolve_task(db: Session, task_id: int, admin: User) -> Task:
    """Close a dispute in favour of the work already done"""
    require_role(admin, Role.ADMIN)
    task = get_task(db, admin, task_id)

    if task.status != TaskStatus.REJECTED:
        raise InvalidTransitionError(
            "resolve", f"Only disputed (rejected) tasks can be resolved (task is {task.status.value})"
        )

    _apply(
        db, task, "resolve", TaskStatus.REJECTED,
        {"status": TaskStatus.COMPLETED, "completed_at": utcnow()},
    )
    audit_service.record(db, AuditAction.RESOLVE_TASK, admin, f"Administratively resolved task '{task.title}'")
    _commit(db, task)

    NotificationService.dispute_resolved(db, task)
    return task


def set_backup_assignee(db: Session, task_id: int, manager: User, backup_user_id: int) -> Task:
    """Record an advisory second manager. Grants no transition rights."""
    require_role(manager, Role.MANAGER)
    task = get_task(db, manager, task_id)

    if task.status != TaskStatus.IN_PROGRESS or task.assigned_to != manager.id:
        raise InvalidTransitionError(
            "set_backup_assignee", "A backup can only be named by the assignee of an in-progress task"
        )

    backup = db.query(User).filter(User.id == backup_user_id).first()
    if not backup:
        raise NotFoundError("Backup user not found")
    if backup.id == manager.id:
        raise ValidationError("The assignee cannot be their own backup")
    if backup.role != Role.MANAGER or backup.suspended:
        raise ValidationError("Backup assignee must be an active manager")

    _apply(
        db, task, "set_backup_assignee", TaskStatus.IN_PROGRESS,
        {"backup_assignee": backup.id},
        Task.assigned_to == manager.id,
    )
    audit_service.record(
        db, AuditAction.SET_BACKUP_ASSIGNEE, manager,
        f"Named {backup.email} as backup for task #{task.id} '{task.title}'"
    )
    _commit(db, task)

    NotificationService.backup_assigned(db, task)
    return task


def set_quality_score(db: Session, task_id: int, actor: User, score: int) -> Task:
    """Write-once 1..5 rating of a completed task by its requester (or an admin)"""
    _require_active(actor)
    task = get_task(db, actor, task_id)

    if task.created_by != actor.id and actor.role != Role.ADMIN:
        raise AuthorizationError("Only the requester can score this task")
    if not WorkflowConfig.QUALITY_SCORE_MIN <= score <= WorkflowConfig.QUALITY_SCORE_MAX:
        raise ValidationError("Score must be between 1 and 5")
    if task.status != TaskStatus.COMPLETED:
        raise InvalidTransitionError(
            "set_quality_score", f"Only completed tasks can be scored (task is {task.status.value})"
        )
    if task.quality_score is not None:
        raise InvalidTransitionError("set_quality_score", "Quality score has already been set")

    _apply(
        db, task, "set_quality_score", TaskStatus.COMPLETED,
        {"quality_score": score},
        Task.quality_score.is_(None),
    )
    audit_service.record(
        db, AuditAction.SET_QUALITY_SCORE, actor,
        f"Scored task #{task.id} '{task.title}' {score}/5"
    )
    _commit(db, task)

    NotificationService.quality_scored(db, task)
    return task
