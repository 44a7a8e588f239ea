"""
Retry policy and async retry combinator.

Wraps tenacity AsyncRetrying behind a small policy object so any fallible
coroutine can be retried with bounded exponential backoff.

Delays are applied before the next attempt only: with base_delay=0.25 and
backoff_factor=2 the waits are 0.25s, 0.5s, 1.0s, ... and there is no wait
after the final attempt.

Dependencies: tenacity
System role: Generic resilience helper for remote calls
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy(BaseModel):
    """Bounded exponential backoff policy."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1, description="Total attempts including the first")
    base_delay: float = Field(default=0.25, ge=0.0, description="Delay in seconds before the second attempt")
    backoff_factor: float = Field(default=2.0, ge=1.0, description="Delay multiplier per failed attempt")

    def delay_before(self, attempt_number: int) -> float:
        """Return the delay applied before the given 1-based attempt."""
        if attempt_number <= 1:
            return 0.0
        return self.base_delay * self.backoff_factor ** (attempt_number - 2)


def _log_before_sleep(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"{__name__}:retry_async - Attempt {retry_state.attempt_number} failed, "
        f"retrying in {retry_state.upcoming_sleep:.3f}s",
        extra={
            "attempt": retry_state.attempt_number,
            "error_type": type(exc).__name__ if exc else None,
            "error_msg": str(exc) if exc else None,
        },
    )


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    retry_on: type[BaseException] | tuple[type[BaseException], ...] = Exception,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Run an async operation, retrying failures according to the policy.

    Args:
        operation: Zero-argument coroutine function to call on every attempt
        policy: Attempt budget and backoff parameters
        retry_on: Exception types that trigger another attempt
        sleep: Awaitable sleep used between attempts

    Returns:
        T: Result of the first successful attempt

    Raises:
        Exception: The last error observed once the attempt budget is exhausted,
            or the first error not matching retry_on
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(policy.max_attempts),
        wait=wait_exponential(
            multiplier=policy.base_delay,
            exp_base=policy.backoff_factor,
        ),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_before_sleep,
        sleep=sleep,
        reraise=True,
    )
    return await retrying(operation)
