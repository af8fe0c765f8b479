import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.config import Settings  # noqa: E402
from core.models import ExecutionContext  # noqa: E402

BASE_URL = "https://dev.dixa.io/v1"
API_KEY = "test-api-key"


class StubDixa:
    """
    Request-capturing stand-in for the Dixa API.

    Every request is recorded; the reply is whatever ``respond`` returns
    (default: 200 with a small JSON body).
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], Any] = lambda request: httpx.Response(
            200, content=b'{"data": []}'
        )
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.respond(request)
        if hasattr(reply, "__await__"):
            reply = await reply
        return reply

    def reply(self, status: int, body: Optional[str] = None) -> None:
        content = body.encode() if body is not None else b""
        self.respond = lambda request: httpx.Response(status, content=content)

    def reply_json(self, status: int, payload: Any) -> None:
        self.reply(status, json.dumps(payload))

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was issued"
        return self.requests[-1]

    def last_body(self) -> Any:
        content = self.last.content
        return json.loads(content) if content else None


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=API_KEY, base_url=BASE_URL)


@pytest.fixture
def stub() -> StubDixa:
    return StubDixa()


@pytest.fixture
def context(settings, stub) -> ExecutionContext:
    return ExecutionContext(settings=settings, http_client=stub.client)


@pytest.fixture
def unconfigured_context(stub) -> ExecutionContext:
    return ExecutionContext(settings=Settings(api_key=None, base_url=BASE_URL), http_client=stub.client)
