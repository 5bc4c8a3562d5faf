# taskbridge/utils/access.py
from sqlalchemy.orm import Session, Query, joinedload

from taskbridge.models import Task, User, Role
from taskbridge.services.errors import AuthorizationError, NotFoundError


def require_role(user: User, *roles: Role) -> None:
    """Raise AuthorizationError unless the user holds one of the roles.

    Called before any lookup so a refused caller learns nothing about the
    resource it addressed.
    """
    if user.role not in roles:
        raise AuthorizationError()
    if user.suspended:
        raise AuthorizationError("Account has been suspended. Please contact administrator.")


class AccessScope:
    """Role-based task visibility

    - ADMIN: sees all tasks
    - MANAGER: sees all tasks (the open queue is global) including own claims
    - USER: sees only the requests they created
    """

    def __init__(self, db: Session):
        self.db = db

    def visible_tasks(self, user: User) -> Query:
        query = self.db.query(Task).options(
            joinedload(Task.creator),
            joinedload(Task.assignee),
            joinedload(Task.backup),
        )
        if user.role in (Role.ADMIN, Role.MANAGER):
            return query
        return query.filter(Task.created_by == user.id)

    def can_view_task(self, user: User, task: Task) -> bool:
        if user.role in (Role.ADMIN, Role.MANAGER):
            return True
        return task.created_by == user.id

    def get_visible_task(self, user: User, task_id: int) -> Task:
        """Fetch a task, treating tasks outside the user's scope as missing"""
        task = self.db.query(Task).filter(Task.id == task_id).first()
        if not task or not self.can_view_task(user, task):
            raise NotFoundError("Task not found")
        return task
