# ticket_status/main.py

import argparse
import asyncio
import logging
from functools import partial
from typing import List, Optional

from .aggregator import StatusAggregator
from .config import Settings, load_settings
from .errors import TicketStatusError
from .export import export_to_csv
from .fetcher import TicketFetcher, make_session
from .loader import load_ticket_ids
from .models import RunSummary
from .queue.queue import SequentialQueue
from .queue.worker import Fetch, enqueue_ticket, process_ticket

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


# ==========================================================
# Pipeline
# ==========================================================

async def run(settings: Settings, fetch: Optional[Fetch] = None) -> RunSummary:
    """
    Load ids, push every one onto the sequential queue, wait for drain, then
    export. `fetch` replaces the HTTP fetcher (used by tests).
    """
    ticket_ids = await asyncio.to_thread(load_ticket_ids, settings.input_path)
    logger.info("Ticket ids: %s", ticket_ids)
    logger.info("fetching all tickets")

    if fetch is None:
        async with make_session(settings.request_timeout) as session:
            fetcher = TicketFetcher(session, settings.api_endpoint, settings.api_key)
            aggregator = await _process_all(ticket_ids, fetcher.fetch, settings.delay)
    else:
        aggregator = await _process_all(ticket_ids, fetch, settings.delay)

    await export_to_csv(aggregator, settings.all_tickets_path, settings.status_counts_path)

    summary = RunSummary(
        enqueued=len(ticket_ids),
        fetched=aggregator.total,
        failed=len(ticket_ids) - aggregator.total,
        status_counts=dict(aggregator.status_counts),
    )
    logger.info(
        "Done: %d enqueued, %d fetched, %d failed",
        summary.enqueued,
        summary.fetched,
        summary.failed,
    )
    return summary


async def _process_all(ticket_ids: List[str], fetch: Fetch, delay_seconds: float) -> StatusAggregator:
    aggregator = StatusAggregator()
    queue = SequentialQueue(partial(process_ticket, fetch=fetch, aggregator=aggregator))
    for ticket_id in ticket_ids:
        enqueue_ticket(queue, ticket_id, delay_seconds)
    await queue.drain()
    return aggregator


# ==========================================================
# CLI
# ==========================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticket-status",
        description="Fetch ticket statuses one by one and export them to CSV.",
    )
    parser.add_argument("-i", "--input", dest="input_path", help="CSV file with ticket ids (first row skipped)")
    parser.add_argument("--all-tickets", dest="all_tickets_path", help="Output CSV for every fetched ticket")
    parser.add_argument("--status-counts", dest="status_counts_path", help="Output CSV for per-status counts")
    parser.add_argument("--delay", type=float, help="Seconds to wait after each request")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(
            input_path=args.input_path,
            all_tickets_path=args.all_tickets_path,
            status_counts_path=args.status_counts_path,
            delay=args.delay,
        )
        asyncio.run(run(settings))
    except (TicketStatusError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
