"""Settle-all fan-out over a thread pool.

Bulk operations submit one provider call per unit of work and join on every
future. A failing unit never short-circuits the batch: its exception is
classified into a FAILED OperationResult and the remaining units keep
running. Units are reported in submission order.
"""

import contextvars
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from infrastructure.logging import get_module_logger
from infrastructure.operations.result import BatchResult, OperationResult
from infrastructure.operations.status import OperationStatus

logger = get_module_logger()

# Maps an exception raised by a unit to (message, error_code).
ErrorClassifier = Callable[[Exception], Tuple[str, str]]


def default_classifier(exc: Exception) -> Tuple[str, str]:
    return str(exc), type(exc).__name__


@dataclass
class WorkUnit:
    """A single provider call plus the context that identifies it.

    Attributes:
        context: Unit identity, e.g. {"resource": "main", "locale": "fi_FI"}
        call: Zero-argument callable performing the provider request
        message: Optional success message; defaults to "ok"
    """

    context: Dict[str, str]
    call: Callable[[], Any]
    message: Optional[str] = None


def settle_all(
    units: Sequence[WorkUnit],
    classify_error: ErrorClassifier = default_classifier,
    max_workers: int = 8,
) -> BatchResult:
    """Run every unit concurrently and wait for all of them to settle.

    Args:
        units: Work units to run.
        classify_error: Converts a unit's exception to (message, error_code).
        max_workers: Thread pool size.

    Returns:
        BatchResult with one terminal OperationResult per unit, in order.
    """
    results: List[OperationResult] = [
        OperationResult.pending(**unit.context) for unit in units
    ]
    if not units:
        return BatchResult(results)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures: List[Future] = []
        for unit, result in zip(units, results):
            # Each unit runs in a copy of the caller context so bound log
            # context (correlation id, command) reaches worker threads.
            futures.append(executor.submit(contextvars.copy_context().run, unit.call))
            result.status = OperationStatus.IN_FLIGHT

        for index, (unit, future) in enumerate(zip(units, futures)):
            try:
                data = future.result()
            except Exception as exc:  # pylint: disable=broad-except
                message, error_code = classify_error(exc)
                results[index] = OperationResult.failure(
                    message, error_code=error_code, **unit.context
                )
                logger.warning(
                    "unit_failed",
                    error=message,
                    error_code=error_code,
                    **unit.context,
                )
                continue
            results[index] = OperationResult.success(
                data=data, message=unit.message or "ok", **unit.context
            )
            logger.debug("unit_succeeded", **unit.context)

    return BatchResult(results)
