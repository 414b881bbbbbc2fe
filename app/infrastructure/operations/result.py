"""Operation result dataclasses.

Uniform result types returned from synchronization operations: one
OperationResult per unit of work (resource, locale, key) and a BatchResult
collecting the settled units of a fan-out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one unit of work.

    Attributes:
        status: OperationStatus -- lifecycle state, terminal once settled
        message: str -- human-friendly message for logs/troubleshooting
        context: Dict[str, str] -- unit identity (resource, locale, key)
        data: Optional[Any] -- payload (push counts, pulled content, ...)
        error_code: Optional[str] -- machine error code for failures
    """

    status: OperationStatus
    message: str
    context: Dict[str, str] = field(default_factory=dict)
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Helper property to check if the unit succeeded.

        Returns:
            True if status is SUCCEEDED, False otherwise
        """
        return self.status == OperationStatus.SUCCEEDED

    @property
    def label(self) -> str:
        """Render the unit context as ``resource=x locale=y`` for messages."""
        return " ".join(f"{k}={v}" for k, v in self.context.items())

    @classmethod
    def pending(cls, **context: str) -> "OperationResult":
        """Create a PENDING result for a unit that has not been submitted."""
        return cls(status=OperationStatus.PENDING, message="pending", context=context)

    @classmethod
    def success(
        cls,
        data: Optional[Any] = None,
        message: str = "ok",
        **context: str,
    ) -> "OperationResult":
        """Create a SUCCEEDED OperationResult with optional data.

        Args:
            data: Optional payload to include with the result
            message: Human-friendly success message
            **context: Unit identity (resource, locale, key)

        Returns:
            OperationResult with SUCCEEDED status
        """
        return cls(
            status=OperationStatus.SUCCEEDED,
            message=message,
            context=context,
            data=data,
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
        **context: str,
    ) -> "OperationResult":
        """Create a FAILED OperationResult.

        Args:
            message: Human-friendly error message
            error_code: Optional machine error code
            data: Optional payload to include with the error
            **context: Unit identity (resource, locale, key)

        Returns:
            OperationResult with FAILED status
        """
        return cls(
            status=OperationStatus.FAILED,
            message=message,
            context=context,
            data=data,
            error_code=error_code,
        )


@dataclass
class BatchResult:
    """Settled outcomes of a fan-out, in submission order."""

    results: List[OperationResult] = field(default_factory=list)

    def __iter__(self) -> Iterator[OperationResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> List[OperationResult]:
        return [r for r in self.results if r.is_success]

    @property
    def failed(self) -> List[OperationResult]:
        return [r for r in self.results if r.status == OperationStatus.FAILED]

    @property
    def is_success(self) -> bool:
        """True only when every unit succeeded. An empty batch is a success."""
        return all(r.is_success for r in self.results)
