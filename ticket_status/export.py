# export.py

import asyncio
import csv
import logging
from typing import Iterable, List

from .aggregator import StatusAggregator
from .models import StatusCount, TicketRecord

logger = logging.getLogger(__name__)

ALL_TICKETS_HEADER = ["Ticket ID", "Status"]
STATUS_COUNTS_HEADER = ["Status", "Count"]


def _write_rows(path: str, header: List[str], rows: Iterable[List[object]]) -> int:
    written = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for row in rows:
            writer.writerow(row)
            written += 1
    return written


def write_all_tickets(path: str, tickets: Iterable[TicketRecord]) -> int:
    return _write_rows(path, ALL_TICKETS_HEADER, ([t.ticket_id, t.status] for t in tickets))


def write_status_counts(path: str, counts: Iterable[StatusCount]) -> int:
    return _write_rows(path, STATUS_COUNTS_HEADER, ([c.status, c.count] for c in counts))


async def export_to_csv(
    aggregator: StatusAggregator,
    all_tickets_path: str,
    status_counts_path: str,
) -> None:
    """Write both export files from the aggregated state, off the event loop."""

    async def all_tickets():
        count = await asyncio.to_thread(write_all_tickets, all_tickets_path, list(aggregator.tickets))
        logger.info("All tickets exported (%d rows) → %s", count, all_tickets_path)

    async def statuses():
        count = await asyncio.to_thread(
            write_status_counts, status_counts_path, aggregator.mapped_status_counts()
        )
        logger.info("Statuses exported (%d rows) → %s", count, status_counts_path)

    await asyncio.gather(all_tickets(), statuses())
