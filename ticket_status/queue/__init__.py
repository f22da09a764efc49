from .queue import QueueCallback, SequentialQueue
from .worker import delay, enqueue_ticket, process_ticket

__all__ = [
    "QueueCallback",
    "SequentialQueue",
    "delay",
    "enqueue_ticket",
    "process_ticket",
]
