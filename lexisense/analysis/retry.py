"""Bounded exponential-backoff retry around transient extraction failures."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from lexisense.analysis.exceptions import EmptyResponseError, ExtractionError
from lexisense.logging.logger import Log

T = TypeVar("T")

TRANSIENT_ERRORS = (ExtractionError, EmptyResponseError)


def _log_retry(state: RetryCallState) -> None:
    exc = state.outcome.exception() if state.outcome else None
    delay = state.next_action.sleep if state.next_action else 0.0
    Log.warning(
        f"Transient AI provider failure, retrying in {delay:.1f}s "
        f"(attempt {state.attempt_number}): {exc}"
    )


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 10.0,
) -> T:
    """Await *operation*, retrying ExtractionError and EmptyResponseError.

    Any other exception (NotConfiguredError, SchemaValidationError, ...) is
    raised on the first occurrence. After *max_attempts* the last transient
    error is re-raised.
    """
    retrying = AsyncRetrying(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=initial_delay, max=max_delay),
        before_sleep=_log_retry,
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            return await operation()
    raise AssertionError("unreachable")  # pragma: no cover
