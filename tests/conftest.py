"""
Shared fixtures: a fake Terminal.com service and clients wired to it.

The fake service is a FastAPI app mounted through ``TestClient`` (itself an
``httpx.Client``), so requests go through the real pipeline without leaving
the process. Transport failures are simulated with ``httpx.MockTransport``.
"""

import json
from collections.abc import Callable
from typing import Any, TextIO

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.testclient import TestClient

from terminalcom.api import TerminalAPI
from terminalcom.config import Settings
from terminalcom.service_client import TerminalServiceClient

BASE_URL = "https://api.terminal.com"
USER_TOKEN = "user-token-123"
ACCESS_TOKEN = "access-token-456"
UBUNTU_SNAP_ID = "987f8d702dc0a6e8158b48ccd3dec24f819a7ccb2756c396ef1fd7f5b34b7980"


class FakeTerminalService:
    def __init__(self):
        self.responses: dict[str, tuple[int, Any]] = {}
        self.requests: list[dict[str, Any]] = []
        self.app = self._build_app()

    def respond(self, endpoint: str, payload: Any, status_code: int = 200) -> None:
        self.responses[endpoint] = (status_code, payload)

    @property
    def last(self) -> dict[str, Any]:
        return self.requests[-1]

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.post("/{version}/{endpoint}")
        async def handle(version: str, endpoint: str, request: Request):
            raw = await request.body()
            self.requests.append(
                {
                    "version": version,
                    "endpoint": endpoint,
                    "path": request.url.path,
                    "raw": raw,
                    "json": json.loads(raw),
                    "headers": dict(request.headers),
                }
            )
            status_code, payload = self.responses.get(endpoint, (200, {"status": "ok"}))
            if isinstance(payload, str):
                return PlainTextResponse(payload, status_code=status_code)
            return JSONResponse(payload, status_code=status_code)

        return app


def make_settings(**overrides) -> Settings:
    values: dict[str, Any] = {"dbg": None, "user_token": None, "access_token": None}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_transport_client(
    handler: Callable[[httpx.Request], httpx.Response],
    settings: Settings | None = None,
    debug_stream: TextIO | None = None,
) -> TerminalServiceClient:
    settings = settings or make_settings()
    http = httpx.Client(base_url=settings.base_url, transport=httpx.MockTransport(handler))
    return TerminalServiceClient(settings, http_client=http, debug_stream=debug_stream)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_service() -> FakeTerminalService:
    return FakeTerminalService()


@pytest.fixture
def service_client(fake_service, settings) -> TerminalServiceClient:
    http = TestClient(fake_service.app, base_url=BASE_URL)
    return TerminalServiceClient(settings, http_client=http)


@pytest.fixture
def api(service_client) -> TerminalAPI:
    return TerminalAPI(service_client)
