"""Fallback chains and rate-limit retries for provider calls."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx

from ..errors import EmptyResultError, MaxRetriesExceededError, RateLimitError, UpstreamError
from .base import records

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]


def has_data(payload: Payload) -> bool:
    return bool(records(payload))


@dataclass(frozen=True)
class FallbackStep:
    name: str
    attempt: Callable[[], Awaitable[Payload]]
    is_success: Callable[[Payload], bool] = has_data


@dataclass
class FallbackOutcome:
    step: str
    payload: Payload
    # names of the steps that were tried and failed before this one
    skipped: List[str]


class FallbackChain:
    """Ordered alternatives for a single logical operation.

    Steps run strictly in order and the first one whose payload satisfies
    ``is_success`` wins. A step that answers without data counts as a failure
    (``EmptyResultError``). When every step fails the last error is raised.
    """

    def __init__(self, operation: str, steps: List[FallbackStep]):
        if not steps:
            raise ValueError("A fallback chain needs at least one step")
        self.operation = operation
        self.steps = list(steps)

    @property
    def order(self) -> List[str]:
        return [step.name for step in self.steps]

    async def run(self) -> FallbackOutcome:
        last_error: Optional[Exception] = None
        skipped: List[str] = []
        for step in self.steps:
            try:
                payload = await step.attempt()
                if step.is_success(payload):
                    if skipped:
                        logger.info(f"{self.operation}: '{step.name}' succeeded after {skipped}")
                    return FallbackOutcome(step=step.name, payload=payload, skipped=skipped)
                raise EmptyResultError(f"{step.name} returned no data")
            except (UpstreamError, httpx.HTTPError) as e:
                logger.warning(f"{self.operation}: step '{step.name}' failed: {e}")
                last_error = e
                skipped.append(step.name)

        raise last_error


async def retry_on_rate_limit(
    operation: Callable[[], Awaitable[Payload]],
    attempts: int = 3,
    delay: float = 2.0,
    description: str = "request",
) -> Payload:
    """Run ``operation``, waiting ``delay`` seconds after every HTTP 429, ``attempts`` tries in total."""
    last_error: Optional[RateLimitError] = None
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except RateLimitError as e:
            last_error = e
            if attempt < attempts:
                logger.warning(f"Rate limited, waiting {delay} seconds before retry {attempt}/{attempts - 1}...")
                await asyncio.sleep(delay)

    raise MaxRetriesExceededError(
        f"Max retries exceeded for {description}", attempts=attempts, last_error=last_error
    )
