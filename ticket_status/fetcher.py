import asyncio
import json
import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError

from .models import FetchFailure, FetchResult, TicketRecord

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


class TicketFetcher:
    """
    GET {endpoint}{ticket_id} with the API key header.

    fetch() never raises for a single ticket; every failure comes back as a
    FetchResult with a reason and is logged here.
    """

    def __init__(self, session: aiohttp.ClientSession, endpoint: str, api_key: str):
        self.session = session
        self.endpoint = endpoint
        self.api_key = api_key

    def url_for(self, ticket_id: str) -> str:
        return f"{self.endpoint}{ticket_id}"

    async def fetch(self, ticket_id: str) -> FetchResult:
        url = self.url_for(ticket_id)
        try:
            async with self.session.get(url, headers={API_KEY_HEADER: self.api_key}) as resp:
                if not 200 <= resp.status < 300:
                    detail = f"Error fetching ticket {ticket_id}: {resp.status} {resp.reason}"
                    logger.error(detail)
                    return FetchResult.failed(
                        ticket_id, FetchFailure.HTTP_ERROR, detail, status_code=resp.status
                    )
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            detail = f"Error fetching ticket {ticket_id}: {e!r}"
            logger.error(detail)
            return FetchResult.failed(ticket_id, FetchFailure.NETWORK_ERROR, detail)

        return self._parse(ticket_id, body)

    def _parse(self, ticket_id: str, body: bytes) -> FetchResult:
        try:
            payload = _decode(body)
            record = TicketRecord.model_validate({**payload, "ticket_id": ticket_id})
        except (ValueError, ValidationError) as e:
            detail = f"Malformed response for ticket {ticket_id}: {e}"
            logger.error(detail)
            return FetchResult.failed(ticket_id, FetchFailure.MALFORMED_RESPONSE, detail)
        return FetchResult.success(record)


def _decode(body: bytes) -> dict:
    payload = json.loads(body)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def make_session(request_timeout: Optional[float] = None) -> aiohttp.ClientSession:
    # total=None disables aiohttp's default 5 minute ceiling
    return aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=request_timeout))
