"""In-process services exposing the analytics operations."""

from squadload.services.grouping_service import GroupingService
from squadload.services.workload_service import WorkloadAnalyticsService

__all__ = [
    "GroupingService",
    "WorkloadAnalyticsService",
]
