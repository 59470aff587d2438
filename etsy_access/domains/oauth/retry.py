"""Retry policy for credential exchange attempts.

An attempt never raises for transient problems: it returns ``ExchangeFailed``
and the policy retries it with exponential backoff (2s, 4s, 8s, ...). When the
budget is used up the last ``ExchangeFailed`` is returned to the caller.
"""

import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt

from etsy_access.core.logging import ContextualLogger, logger as default_logger
from etsy_access.domains.oauth.types import ExchangeFailed, ExchangeResult

Sleep = Callable[[float], Awaitable[None]]


def backoff_seconds(retry_number: int) -> float:
    """Wait before retry ``retry_number`` (1-based): 2 ** n seconds, no jitter."""
    return float(2**retry_number)


@dataclass
class RetryState:
    """Attempt bookkeeping for a single ``RetryPolicy.run`` call."""

    attempts: int = 0
    last_backoff: float = 0.0


def _is_failed(result: ExchangeResult) -> bool:
    return isinstance(result, ExchangeFailed)


class RetryPolicy:
    """Retries an exchange attempt while it reports failure."""

    def __init__(
        self,
        retry_attempts: int,
        *,
        sleep: Sleep = asyncio.sleep,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the policy.

        Args:
            retry_attempts: Retries after the first attempt (0 disables retrying)
            sleep: Coroutine used to wait between attempts
            logger: Logger for retry events
        """
        if retry_attempts < 0:
            raise ValueError(f"retry_attempts must be >= 0, got {retry_attempts}")
        self.retry_attempts = retry_attempts
        self._sleep = sleep
        self._logger = logger or default_logger

    async def run(
        self,
        attempt: Callable[[], Awaitable[ExchangeResult]],
        *,
        description: str = "exchange",
        logger: Optional[ContextualLogger] = None,
    ) -> ExchangeResult:
        """Run ``attempt`` until it succeeds or the retry budget is exhausted.

        Args:
            attempt: Zero-argument callable returning a fresh coroutine per call
            description: Label used in retry log events
            logger: Overrides the policy logger for this run

        Returns:
            The first ``ExchangeOk``, or the last ``ExchangeFailed``. Either
            carries the number of attempts made.
        """
        log = logger or self._logger
        state = RetryState()

        async def _counted() -> ExchangeResult:
            state.attempts += 1
            return await attempt()

        def _wait(retry_state: RetryCallState) -> float:
            state.last_backoff = backoff_seconds(retry_state.attempt_number)
            return state.last_backoff

        def _before_sleep(retry_state: RetryCallState) -> None:
            log.warning(
                f"Retrying {description}: attempt {retry_state.attempt_number} failed, "
                f"retry {retry_state.attempt_number} of {self.retry_attempts} "
                f"in {state.last_backoff:.0f}s"
            )

        def _exhausted(retry_state: RetryCallState) -> ExchangeResult:
            log.error(f"Giving up on {description} after {state.attempts} attempt(s)")
            return retry_state.outcome.result()

        retrying = AsyncRetrying(
            sleep=self._sleep,
            retry=retry_if_result(_is_failed),
            stop=stop_after_attempt(self.retry_attempts + 1),
            wait=_wait,
            before_sleep=_before_sleep,
            retry_error_callback=_exhausted,
        )

        result = await retrying(_counted)
        return dataclasses.replace(result, attempts_made=state.attempts)
