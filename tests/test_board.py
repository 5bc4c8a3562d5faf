"""Board columns derived from (status, assigned_to) per viewer."""

from types import SimpleNamespace

import pytest

from taskbridge.models import TaskStatus
from taskbridge.services import task_service
from taskbridge.services.board import BoardColumn, board_column, build_board
from taskbridge.services.errors import AuthorizationError

ME = 1
SOMEONE = 2


@pytest.mark.parametrize(
    "status, assigned_to, expected",
    [
        (TaskStatus.PENDING, None, BoardColumn.QUEUE),
        (TaskStatus.PENDING, ME, BoardColumn.TODO),
        (TaskStatus.IN_PROGRESS, ME, BoardColumn.IN_PROGRESS),
        (TaskStatus.COMPLETED, ME, BoardColumn.COMPLETED),
        (TaskStatus.REJECTED, ME, None),
        (TaskStatus.PENDING, SOMEONE, None),
        (TaskStatus.IN_PROGRESS, SOMEONE, None),
        (TaskStatus.COMPLETED, None, None),
    ],
)
def test_board_column(status, assigned_to, expected):
    assert board_column(status, assigned_to, ME) == expected


def test_build_board_keeps_every_column():
    tasks = [
        SimpleNamespace(id=1, status=TaskStatus.PENDING, assigned_to=None),
        SimpleNamespace(id=2, status=TaskStatus.IN_PROGRESS, assigned_to=ME),
        SimpleNamespace(id=3, status=TaskStatus.IN_PROGRESS, assigned_to=SOMEONE),
    ]

    board = build_board(tasks, ME)

    assert set(board) == {"QUEUE", "TODO", "IN_PROGRESS", "COMPLETED"}
    assert [t.id for t in board["QUEUE"]] == [1]
    assert [t.id for t in board["IN_PROGRESS"]] == [2]
    assert board["TODO"] == []


def test_claimed_task_leaves_everyone_elses_queue(db, requester, manager, other_manager, make_task):
    task = make_task(requester)
    assert [t.id for t in task_service.get_board(db, other_manager)["QUEUE"]] == [task.id]

    task_service.claim_task(db, task.id, manager)

    mine = task_service.get_board(db, manager)
    theirs = task_service.get_board(db, other_manager)
    assert [t.id for t in mine["TODO"]] == [task.id]
    assert all(not column for column in theirs.values())


def test_board_is_for_managers(db, requester):
    with pytest.raises(AuthorizationError):
        task_service.get_board(db, requester)
