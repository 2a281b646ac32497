"""Read-side helpers: task filtering and dashboard counts."""

from adminflow.core.query.models import DashboardStats, TaskQuery

__all__ = [
    "DashboardStats",
    "TaskQuery",
]
