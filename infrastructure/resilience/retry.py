import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Iterator
from typing import TypeVar

from tenacity import AsyncRetrying, RetryCallState, RetryError, retry_if_exception, stop_after_attempt

from domain.exceptions.currency import (
    ConversionError,
    OperationCancelledError,
    RetriesExhaustedError,
)
from infrastructure.resilience.backoff import BackoffPolicy, RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def execute(
    policy: RetryPolicy,
    is_retryable: Callable[[BaseException], bool],
    operation: Callable[[], Awaitable[T]],
    cancel_event: asyncio.Event | None = None,
) -> T:
    """Run ``operation`` until it succeeds or retrying stops making sense.

    Non-retryable errors are re-raised unchanged after the attempt that
    produced them. A retryable error on the last allowed attempt surfaces as
    RetriesExhaustedError wrapping it. Setting ``cancel_event`` aborts both
    the wait between attempts and an attempt in flight, raising
    OperationCancelledError.
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=BackoffPolicy(policy),
        retry=retry_if_exception(_should_retry(is_retryable)),
        sleep=_cancellable_sleep(cancel_event),
        before_sleep=_log_before_sleep,
    )

    try:
        return await retrying(_cancellable_attempt(operation, cancel_event))
    except RetryError as e:
        last_error = e.last_attempt.exception()
        logger.error(f"Giving up after {policy.max_attempts} attempts: {last_error}")
        raise RetriesExhaustedError(policy.max_attempts, last_error) from last_error


@contextlib.contextmanager
def deadline_signal(seconds: float | None) -> Iterator[asyncio.Event]:
    """Yield an event that gets set once ``seconds`` have elapsed.

    Meant to be passed as ``cancel_event`` so that one deadline covers every
    attempt and every wait. ``None`` yields an event that never fires on its own.
    """
    event = asyncio.Event()
    handle = None
    if seconds is not None:
        handle = asyncio.get_running_loop().call_later(seconds, event.set)
    try:
        yield event
    finally:
        if handle is not None:
            handle.cancel()


def _should_retry(is_retryable: Callable[[BaseException], bool]) -> Callable[[BaseException], bool]:
    def predicate(error: BaseException) -> bool:
        if not isinstance(error, Exception) or isinstance(error, OperationCancelledError):
            return False
        return is_retryable(error)

    return predicate


def _cancellable_attempt(
    operation: Callable[[], Awaitable[T]], cancel_event: asyncio.Event | None
) -> Callable[[], Awaitable[T]]:
    async def attempt() -> T:
        if cancel_event is None:
            return await operation()
        if cancel_event.is_set():
            raise OperationCancelledError("cancelled before the next attempt")
        return await _race(operation(), cancel_event)

    return attempt


async def _race(awaitable: Awaitable[T], cancel_event: asyncio.Event) -> T:
    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel_event.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            task.cancel()

    if task in done:
        return task.result()

    # Let the aborted request release its connection before reporting.
    await asyncio.wait({task})
    raise OperationCancelledError("cancelled while the request was in flight")


def _cancellable_sleep(cancel_event: asyncio.Event | None) -> Callable[[float], Awaitable[None]]:
    async def sleep(seconds: float) -> None:
        if cancel_event is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
        except TimeoutError:
            return
        raise OperationCancelledError(f"cancelled while waiting {seconds:.2f}s to retry")

    return sleep


def _log_before_sleep(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    kind = error.kind.value if isinstance(error, ConversionError) else type(error).__name__
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"Attempt {retry_state.attempt_number} failed ({kind}): {error}; retrying in {delay:.2f}s"
    )
