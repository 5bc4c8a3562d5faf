# taskbridge/services/analytics.py
"""
Dashboard aggregations.

Everything here is recomputed per request by reducing over the task and user
tables; nothing is cached or indexed incrementally. The reducers take plain
iterables so they can be tested without a database.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional
import math

from sqlalchemy.orm import Session

from taskbridge.config.workflow import WorkflowConfig
from taskbridge.models import Task, TaskStatus, TaskPriority, User, Role
from taskbridge.utils.access import require_role
from taskbridge.utils.clock import utcnow

DAY_KEYS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


def percent(part: int, total: int) -> int:
    """Integer percentage rounded half up, 0 for an empty total"""
    if total == 0:
        return 0
    return int(math.floor(part * 100 / total + 0.5))


def completion_rate(tasks: Iterable[Task]) -> int:
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return percent(completed, len(tasks))


def role_distribution(users: Iterable[User]) -> Dict[str, int]:
    distribution = {role.value: 0 for role in Role}
    for user in users:
        distribution[user.role.value] += 1
    return distribution


def day_of_week_heatmap(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
    window_days: int = WorkflowConfig.HEATMAP_WINDOW_DAYS,
) -> Dict[str, int]:
    """Completed-task counts per weekday of completion over the trailing window"""
    now = now or utcnow()
    cutoff = now - timedelta(days=window_days)
    heatmap = {day: 0 for day in DAY_KEYS}
    for task in tasks:
        if task.status != TaskStatus.COMPLETED or task.completed_at is None:
            continue
        if task.completed_at <= cutoff:
            continue
        heatmap[DAY_KEYS[task.completed_at.weekday()]] += 1
    return heatmap


def average_hours(tasks: Iterable[Task]) -> Optional[float]:
    """Mean start-to-finish time of completed tasks; None when not applicable"""
    durations = [
        (t.completed_at - t.started_at).total_seconds() / 3600
        for t in tasks
        if t.status == TaskStatus.COMPLETED and t.started_at is not None and t.completed_at is not None
    ]
    if not durations:
        return None
    return round(sum(durations) / len(durations), 1)


def finance_stats(
    tasks: Iterable[Task],
    now: Optional[datetime] = None,
    rate: float = WorkflowConfig.FIXED_RATE_PER_TASK,
) -> Dict:
    tasks = list(tasks)
    completed_count = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)
    return {
        "total_earnings": completed_count * rate,
        "efficiency": completion_rate(tasks),
        "avg_hours": average_hours(tasks),
        "completed_count": completed_count,
        "heatmap": day_of_week_heatmap(tasks, now=now),
    }


def status_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    counts = {status.value: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status.value] += 1
    return counts


# ---------------------------------------------------------------------------
# Role-scoped dashboards
# ---------------------------------------------------------------------------

def manager_finance_stats(db: Session, manager: User, now: Optional[datetime] = None) -> Dict:
    """Earnings and throughput over the tasks assigned to the manager"""
    require_role(manager, Role.MANAGER)
    tasks = db.query(Task).filter(Task.assigned_to == manager.id).all()
    return finance_stats(tasks, now=now)


def admin_overview(db: Session, admin: User) -> Dict:
    require_role(admin, Role.ADMIN)
    tasks: List[Task] = db.query(Task).all()
    users: List[User] = db.query(User).all()

    queued = [t for t in tasks if t.status == TaskStatus.PENDING and t.assigned_to is None]
    return {
        "total_tasks": len(tasks),
        "status_counts": status_counts(tasks),
        "completion_rate": completion_rate(tasks),
        "role_distribution": role_distribution(users),
        "open_disputes": sum(1 for t in tasks if t.status == TaskStatus.REJECTED),
        "backlog": len(queued),
        "urgent_unassigned": sum(1 for t in queued if t.priority == TaskPriority.URGENT),
        "suspended_users": sum(1 for u in users if u.suspended),
        "available_managers": sum(
            1 for u in users if u.role == Role.MANAGER and u.available and not u.suspended
        ),
    }


def user_summary(db: Session, user: User) -> Dict:
    """Request history stats for the requester's own dashboard"""
    tasks = db.query(Task).filter(Task.created_by == user.id).all()
    counts = status_counts(tasks)
    return {
        "total": len(tasks),
        "pending": counts[TaskStatus.PENDING.value],
        "in_progress": counts[TaskStatus.IN_PROGRESS.value],
        "completed": counts[TaskStatus.COMPLETED.value],
        "rejected": counts[TaskStatus.REJECTED.value],
        "completion_rate": completion_rate(tasks),
    }


def heatmap_for(db: Session, user: User, now: Optional[datetime] = None) -> Dict[str, int]:
    """Managers see their own throughput, admins see the whole platform"""
    require_role(user, Role.ADMIN, Role.MANAGER)
    query = db.query(Task).filter(Task.status == TaskStatus.COMPLETED)
    if user.role == Role.MANAGER:
        query = query.filter(Task.assigned_to == user.id)
    return day_of_week_heatmap(query.all(), now=now)
