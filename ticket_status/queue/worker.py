# queue/worker.py

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..aggregator import StatusAggregator
from ..models import FetchResult, QueueTask
from .queue import SequentialQueue

logger = logging.getLogger(__name__)

Fetch = Callable[[str], Awaitable[FetchResult]]


async def delay(duration: float) -> None:
    await asyncio.sleep(duration)


async def process_ticket(
    task: QueueTask,
    fetch: Fetch,
    aggregator: StatusAggregator,
    sleep: Callable[[float], Awaitable[None]] = delay,
) -> FetchResult:
    """
    Fetch one ticket, record it if the fetch worked, then wait out the delay.

    The delay runs whatever the fetch outcome, so request starts stay spaced.
    """
    try:
        result = await fetch(task.ticket_id)
        if result.ok:
            aggregator.add(result.record)
    finally:
        await sleep(task.delay)
    return result


def _log_outcome(error: Optional[BaseException], task: QueueTask) -> None:
    if error is not None:
        logger.error("Failed to process ticket: %s %r", task.ticket_id, error)
    else:
        logger.info("Ticket processed successfully: %s", task.ticket_id)


def enqueue_ticket(queue: SequentialQueue, ticket_id: str, delay_seconds: float) -> None:
    queue.push(QueueTask(ticket_id=ticket_id, delay=delay_seconds), _log_outcome)
