import csv
import logging
from typing import List

logger = logging.getLogger(__name__)


def load_ticket_ids(path: str, column: int = 0) -> List[str]:
    """
    Read ticket ids from a CSV file, in file order.

    The first row is always dropped as a header, whether or not it looks like
    one. Blank rows and rows without the id column are skipped. A file that
    cannot be opened raises; there is no partial result.
    """
    ticket_ids: List[str] = []
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)
        for row in reader:
            if len(row) <= column or not row[column]:
                continue
            ticket_ids.append(row[column])

    logger.info("Loaded %d ticket ids from %s", len(ticket_ids), path)
    return ticket_ids
