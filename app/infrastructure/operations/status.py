"""Operation status enumeration.

Lifecycle states for a single unit of synchronization work. A unit starts
PENDING, moves to IN_FLIGHT when its provider call is submitted and settles
in exactly one terminal state.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for a unit of work.

    Attributes:
        PENDING: Unit created, not yet submitted
        IN_FLIGHT: Provider call submitted, awaiting the response
        SUCCEEDED: Terminal, the provider accepted the call
        FAILED: Terminal, the call raised or was rejected
    """

    PENDING = "pending"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """True for SUCCEEDED and FAILED."""
        return self in (OperationStatus.SUCCEEDED, OperationStatus.FAILED)
