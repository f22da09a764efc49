"""Exceptions raised by the ticket status exporter."""


class TicketStatusError(Exception):
    """Base class for errors that should stop a run."""


class ConfigError(TicketStatusError):
    """Raised when required configuration is missing or invalid."""


class QueueClosedError(TicketStatusError):
    """Raised when a task is pushed after the queue has drained."""
