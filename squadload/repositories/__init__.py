from squadload.repositories.workload_history import WorkloadHistoryRepository

__all__ = ["WorkloadHistoryRepository"]
