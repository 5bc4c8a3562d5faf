# taskbridge/schemas/task.py
from datetime import date, datetime
from typing import Optional, List, Dict

from taskbridge.models.task import TaskStatus, TaskPriority
from taskbridge.schemas.common import CamelModel
from taskbridge.schemas.user import UserBasic


class TaskCreate(CamelModel):
    # Presence is checked by the task service so a missing field surfaces
    # as a ValidationError rather than a schema error
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[TaskPriority] = None
    deadline: Optional[date] = None


class TaskClaim(CamelModel):
    to_do_plan: Optional[str] = None


class TaskReject(CamelModel):
    reason: Optional[str] = None


class TaskComplete(CamelModel):
    feedback: Optional[str] = None
    proof: Optional[str] = None


class TaskReassign(CamelModel):
    new_assignee_id: int


class BackupAssign(CamelModel):
    backup_user_id: int


class QualityScore(CamelModel):
    score: int


class TaskOut(CamelModel):
    id: int
    title: str
    description: str
    category: str
    priority: TaskPriority
    deadline: date
    status: TaskStatus

    created_by: int
    assigned_to: Optional[int] = None
    backup_assignee: Optional[int] = None

    to_do_plan: Optional[str] = None
    feedback: Optional[str] = None
    completion_proof: Optional[str] = None
    rejection_reason: Optional[str] = None
    quality_score: Optional[int] = None

    created_at: datetime
    updated_at: Optional[datetime] = None
    assigned_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # Related objects
    creator: Optional[UserBasic] = None
    assignee: Optional[UserBasic] = None
    backup: Optional[UserBasic] = None


# Board columns keyed QUEUE / TODO / IN_PROGRESS / COMPLETED
TaskBoard = Dict[str, List[TaskOut]]
