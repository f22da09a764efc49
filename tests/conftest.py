import csv
from typing import Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

import ticket_status.config

ENV_VARS = (
    "API_ENDPOINT",
    "API_KEY",
    "TICKETS_CSV",
    "ALL_TICKETS_EXPORT",
    "STATUS_COUNTS_EXPORT",
    "TICKET_DELAY_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(ticket_status.config, "load_dotenv", lambda *a, **kw: False)


@pytest.fixture
def write_csv(tmp_path):
    def _write(name: str, text: str) -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def read_csv():
    def _read(path) -> List[List[str]]:
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.reader(f))

    return _read


class FakeTicketApi:
    """Routes GET /tickets/{id} to canned (status code, body) pairs."""

    API_KEY = "test-secret"

    def __init__(self) -> None:
        self.responses: Dict[str, Tuple[int, object]] = {}
        self.requests: List[Tuple[str, str]] = []
        self.server: TestServer = None

    @property
    def endpoint(self) -> str:
        return str(self.server.make_url("/tickets/"))

    def add(self, ticket_id: str, body: object, status: int = 200) -> None:
        self.responses[ticket_id] = (status, body)

    async def handle(self, request: web.Request) -> web.Response:
        ticket_id = request.match_info["ticket_id"]
        self.requests.append((ticket_id, request.headers.get("X-API-KEY")))
        if request.headers.get("X-API-KEY") != self.API_KEY:
            return web.json_response({"message": "forbidden"}, status=403)
        if ticket_id not in self.responses:
            return web.json_response({"message": "not found"}, status=404)
        status, body = self.responses[ticket_id]
        if isinstance(body, str):
            return web.Response(text=body, status=status)
        return web.json_response(body, status=status)


@pytest_asyncio.fixture
async def ticket_api():
    api = FakeTicketApi()
    app = web.Application()
    app.router.add_get("/tickets/{ticket_id}", api.handle)
    api.server = TestServer(app)
    await api.server.start_server()
    yield api
    await api.server.close()
