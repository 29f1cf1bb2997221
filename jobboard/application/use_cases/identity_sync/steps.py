"""Retrying runner for individual workflow steps.

Each step is a coroutine that opens its own transaction, so a failed
attempt leaves nothing behind and the next attempt starts fresh. No
lock or session is held across attempts.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from opentelemetry import trace

from jobboard.domain.exceptions import TransientInfrastructureException, ValidationException
from jobboard.shared.telemetry.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_RETRY_ON: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError)


class StepRunner:
    """Runs a step with bounded retries and exponential backoff on transient errors.

    Validation failures are permanent and never retried. Exhausting the
    attempts raises TransientInfrastructureException, which callers treat
    as retriable (the webhook sender redelivers).
    """

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        backoff_seconds: float = 0.2,
        retry_on: tuple[type[BaseException], ...] = DEFAULT_RETRY_ON,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.retry_on = retry_on
        self._sleep = sleep

    async def run(self, step: str, fn: Callable[[], Awaitable[T]]) -> T:
        last_error: BaseException | None = None
        for attempt in range(1, self.max_attempts + 1):
            with tracer.start_as_current_span(f"identity_sync.{step}") as span:
                span.set_attribute("step", step)
                span.set_attribute("attempt", attempt)
                try:
                    return await fn()
                except ValidationException:
                    raise
                except self.retry_on as exc:
                    last_error = exc
                    span.record_exception(exc)
                    logger.warning(
                        "Step %s failed (attempt %d/%d): %s",
                        step,
                        attempt,
                        self.max_attempts,
                        exc,
                    )
            if attempt < self.max_attempts:
                await self._sleep(self.backoff_seconds * 2 ** (attempt - 1))

        raise TransientInfrastructureException(
            step, str(last_error), self.max_attempts
        ) from last_error
