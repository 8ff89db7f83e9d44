"""Long-running operation handling for vidint."""

from vidint.jobs.models import Operation, OperationStatus

__all__ = ["Operation", "OperationStatus"]
