"""
Sequential throttling for bulk calls against rate-limited services.

Services that cap requests per tenant reject bursts of concurrent calls, so
bulk work is issued one item at a time with a growing pause between calls.
"""
import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from config import THROTTLE_CONFIG
from projectstore.utils.logger_utils import logger

T = TypeVar("T")
R = TypeVar("R")


def backoff_delays(
    count: int,
    initial_delay_ms: int,
    increment_ms: int,
    max_delay_ms: int,
) -> List[int]:
    """Delays (ms) to wait after each of ``count`` calls."""
    delays: List[int] = []
    delay = initial_delay_ms
    for _ in range(count):
        delays.append(delay)
        delay = min(delay + increment_ms, max_delay_ms)
    return delays


async def run_sequentially(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    initial_delay_ms: Optional[int] = None,
    increment_ms: Optional[int] = None,
    max_delay_ms: Optional[int] = None,
) -> List[R]:
    """
    Await ``operation(item)`` for each item strictly in order.

    After every call the next one is held back by a delay that starts at
    ``initial_delay_ms``, grows by ``increment_ms`` and never exceeds
    ``max_delay_ms``. The first failing call propagates and stops the run.

    Returns:
        Results of each call, in input order.
    """
    if initial_delay_ms is None:
        initial_delay_ms = THROTTLE_CONFIG["INITIAL_DELAY_MS"]
    if increment_ms is None:
        increment_ms = THROTTLE_CONFIG["INCREMENT_MS"]
    if max_delay_ms is None:
        max_delay_ms = THROTTLE_CONFIG["MAX_DELAY_MS"]

    items = list(items)
    delays = backoff_delays(len(items), initial_delay_ms, increment_ms, max_delay_ms)

    results: List[R] = []
    for item, delay_ms in zip(items, delays):
        results.append(await operation(item))
        await asyncio.sleep(delay_ms / 1000)

    logger.debug(f"Throttled run completed {len(results)} calls")
    return results
