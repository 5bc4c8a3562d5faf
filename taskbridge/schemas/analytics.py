# taskbridge/schemas/analytics.py
from typing import Dict, Optional

from taskbridge.schemas.common import CamelModel


class FinanceStats(CamelModel):
    total_earnings: float
    efficiency: int
    # None when no completed task has both timestamps ("not applicable")
    avg_hours: Optional[float] = None
    completed_count: int
    heatmap: Dict[str, int]


class AdminOverview(CamelModel):
    total_tasks: int
    status_counts: Dict[str, int]
    completion_rate: int
    role_distribution: Dict[str, int]
    open_disputes: int
    backlog: int
    urgent_unassigned: int
    suspended_users: int
    available_managers: int


class UserSummary(CamelModel):
    total: int
    pending: int
    in_progress: int
    completed: int
    rejected: int
    completion_rate: int
