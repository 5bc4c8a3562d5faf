# taskbridge/config/workflow.py
# Tunables for the task workflow and the analytics derived from it

import os


class WorkflowConfig:
    """Workflow and analytics configuration"""

    # Payout credited to a manager for every completed task
    FIXED_RATE_PER_TASK = float(os.getenv('FIXED_RATE_PER_TASK', 50.0))

    # Trailing window for the day-of-week completion heatmap
    HEATMAP_WINDOW_DAYS = int(os.getenv('HEATMAP_WINDOW_DAYS', 90))

    # Clients re-poll the API at this interval to converge on server state
    POLL_INTERVAL_SECONDS = int(os.getenv('POLL_INTERVAL_SECONDS', 15))

    DEFAULT_CATEGORY = os.getenv('DEFAULT_TASK_CATEGORY', 'IT_SUPPORT')

    QUALITY_SCORE_MIN = 1
    QUALITY_SCORE_MAX = 5

    @classmethod
    def client_config(cls) -> dict:
        """Settings the frontend needs to drive its refresh loop"""
        return {
            "pollIntervalSeconds": cls.POLL_INTERVAL_SECONDS,
            "heatmapWindowDays": cls.HEATMAP_WINDOW_DAYS,
            "fixedRatePerTask": cls.FIXED_RATE_PER_TASK,
        }
