# taskbridge/routers/task.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from taskbridge.database import get_db
from taskbridge.models import user as user_model
from taskbridge.models.task import TaskStatus
from taskbridge.schemas import task as task_schema
from taskbridge.schemas.analytics import FinanceStats
from taskbridge.services import analytics, task_service
from taskbridge.utils.auth import get_current_user

router = APIRouter()


@router.post("/", response_model=task_schema.TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: task_schema.TaskCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.create_task(db, current_user, task)


@router.get("/", response_model=List[task_schema.TaskOut])
def get_tasks(
    status: Optional[TaskStatus] = Query(None),
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    """Admins and managers see every task, users see their own requests"""
    return task_service.list_tasks(db, current_user, status)


@router.get("/board", response_model=task_schema.TaskBoard)
def get_board(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.get_board(db, current_user)


@router.get("/disputes", response_model=List[task_schema.TaskOut])
def get_disputes(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.list_disputes(db, current_user)


@router.get("/finance-stats", response_model=FinanceStats)
def get_finance_stats(
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return analytics.manager_finance_stats(db, current_user)


@router.get("/{task_id}", response_model=task_schema.TaskOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.get_task(db, current_user, task_id)


# Lifecycle transitions

@router.put("/{task_id}/claim", response_model=task_schema.TaskOut)
def claim_task(
    task_id: int,
    body: Optional[task_schema.TaskClaim] = None,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.claim_task(db, task_id, current_user, body.to_do_plan if body else None)


@router.put("/{task_id}/start", response_model=task_schema.TaskOut)
def start_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.start_task(db, task_id, current_user)


@router.put("/{task_id}/reject", response_model=task_schema.TaskOut)
def reject_task(
    task_id: int,
    body: task_schema.TaskReject,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.reject_task(db, task_id, current_user, body.reason)


@router.put("/{task_id}/complete", response_model=task_schema.TaskOut)
def complete_task(
    task_id: int,
    body: Optional[task_schema.TaskComplete] = None,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    body = body or task_schema.TaskComplete()
    return task_service.complete_task(db, task_id, current_user, body.feedback, body.proof)


@router.put("/{task_id}/rerequest", response_model=task_schema.TaskOut)
def rerequest_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.rerequest_task(db, task_id, current_user)


@router.put("/{task_id}/reassign", response_model=task_schema.TaskOut)
def reassign_task(
    task_id: int,
    body: task_schema.TaskReassign,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.reassign_task(db, task_id, current_user, body.new_assignee_id)


@router.put("/{task_id}/resolve", response_model=task_schema.TaskOut)
def resolve_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.resolve_task(db, task_id, current_user)


@router.put("/{task_id}/backup-assignee", response_model=task_schema.TaskOut)
def set_backup_assignee(
    task_id: int,
    body: task_schema.BackupAssign,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.set_backup_assignee(db, task_id, current_user, body.backup_user_id)


@router.put("/{task_id}/quality-score", response_model=task_schema.TaskOut)
def set_quality_score(
    task_id: int,
    body: task_schema.QualityScore,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(get_current_user)
):
    return task_service.set_quality_score(db, task_id, current_user, body.score)
