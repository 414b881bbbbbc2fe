"""Operation result types, status enums and the settle-all fan-out.

This module contains the standardized result types returned by
synchronization operations and the thread-pool join used by every bulk
operation.
"""

from infrastructure.operations.fanout import WorkUnit, settle_all
from infrastructure.operations.result import BatchResult, OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "BatchResult",
    "OperationResult",
    "OperationStatus",
    "WorkUnit",
    "settle_all",
]
