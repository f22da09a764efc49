# queue/queue.py

import asyncio
import logging
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, Tuple

from ..errors import QueueClosedError
from ..models import QueueTask

logger = logging.getLogger(__name__)

Worker = Callable[[QueueTask], Awaitable[None]]
QueueCallback = Callable[[Optional[BaseException], QueueTask], None]


class SequentialQueue:
    """
    FIFO task queue that runs exactly one task at a time.

    Tasks pushed before draining are all finished before drain() returns.
    A worker exception is handed to that task's callback and the queue moves
    on; a callback exception is logged and the queue moves on.
    """

    concurrency = 1

    def __init__(self, worker: Worker) -> None:
        self._worker = worker
        self._pending: Deque[Tuple[QueueTask, Optional[QueueCallback]]] = deque()
        self._runner: Optional[asyncio.Task] = None
        self._drained = asyncio.Event()
        self._in_flight = 0
        self.processed = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def drained(self) -> bool:
        return self._drained.is_set()

    def push(self, task: QueueTask, callback: Optional[QueueCallback] = None) -> None:
        if self._drained.is_set():
            raise QueueClosedError(f"Queue already drained, cannot push {task.ticket_id}")
        self._pending.append((task, callback))
        if self._runner is None:
            self._runner = asyncio.get_running_loop().create_task(self._run())

    async def drain(self) -> None:
        """Wait until every pushed task has completed. Fires once."""
        if self._runner is None and not self._pending:
            self._fire_drain()
        await self._drained.wait()

    async def _run(self) -> None:
        while self._pending:
            task, callback = self._pending.popleft()
            error: Optional[BaseException] = None
            self._in_flight += 1
            try:
                await self._worker(task)
            except Exception as e:
                error = e
            finally:
                self._in_flight -= 1
                self.processed += 1
            self._notify(callback, error, task)
        self._runner = None
        self._fire_drain()

    def _notify(
        self,
        callback: Optional[QueueCallback],
        error: Optional[BaseException],
        task: QueueTask,
    ) -> None:
        if callback is None:
            return
        try:
            callback(error, task)
        except Exception:
            logger.exception("Failed to process ticket: %s (callback error)", task.ticket_id)

    def _fire_drain(self) -> None:
        if self._drained.is_set():
            return
        logger.debug("Queue drained after %d tasks", self.processed)
        self._drained.set()
