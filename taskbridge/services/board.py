# taskbridge/services/board.py
"""
Board columns are a projection of ``(status, assigned_to)`` relative to the
manager looking at the board. They are never stored: the same task sits in
QUEUE for everyone until it is claimed, then only its assignee sees it in
TODO / IN_PROGRESS / COMPLETED.
"""

import enum
from typing import Dict, Iterable, List, Optional

from taskbridge.models.task import Task, TaskStatus


class BoardColumn(str, enum.Enum):
    QUEUE = "QUEUE"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def board_column(status: TaskStatus, assigned_to: Optional[int], viewer_id: int) -> Optional[BoardColumn]:
    if status == TaskStatus.PENDING and assigned_to is None:
        return BoardColumn.QUEUE
    if assigned_to != viewer_id:
        return None
    if status == TaskStatus.PENDING:
        return BoardColumn.TODO
    if status == TaskStatus.IN_PROGRESS:
        return BoardColumn.IN_PROGRESS
    if status == TaskStatus.COMPLETED:
        return BoardColumn.COMPLETED
    # REJECTED tasks are disputes and live on the admin side
    return None


def build_board(tasks: Iterable[Task], viewer_id: int) -> Dict[str, List[Task]]:
    board: Dict[str, List[Task]] = {column.value: [] for column in BoardColumn}
    for task in tasks:
        column = board_column(task.status, task.assigned_to, viewer_id)
        if column is not None:
            board[column.value].append(task)
    return board
