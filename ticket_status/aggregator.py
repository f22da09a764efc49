from typing import Dict, List

from .models import StatusCount, TicketRecord


class StatusAggregator:
    """Tickets in completion order plus a tally per status, first-seen order."""

    def __init__(self) -> None:
        self.tickets: List[TicketRecord] = []
        self.status_counts: Dict[str, int] = {}

    def add(self, record: TicketRecord) -> None:
        self.tickets.append(record)
        self.status_counts[record.status] = self.status_counts.get(record.status, 0) + 1

    @property
    def total(self) -> int:
        return len(self.tickets)

    def mapped_status_counts(self) -> List[StatusCount]:
        return [
            StatusCount(status=status, count=count)
            for status, count in self.status_counts.items()
        ]
