import json
import logging
import sys
import time
from typing import Any, TextIO

import httpx

from .config import Settings, get_settings
from .normalize import normalize_timestamps

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


class TerminalAPIError(RuntimeError):
    pass


class RemoteError(TerminalAPIError):
    def __init__(self, status_code: int, body: str, *, path: str | None = None):
        target = f" from {path}" if path else ""
        super().__init__(f"Unexpected status {status_code}{target}: {body}")
        self.status_code = status_code
        self.body = body
        self.path = path


class NetworkError(TerminalAPIError):
    def __init__(self, original: BaseException, *, path: str | None = None):
        target = f" to {path}" if path else ""
        super().__init__(f"Request{target} failed: {type(original).__name__}: {original}")
        self.original = original
        self.path = path


def curl_command(url: str, body: str) -> str:
    headers = " ".join(f"{key}: {value}" for key, value in HEADERS.items())
    return f"curl -L -X POST -H '{headers}' -d '{body}' {url}"


class TerminalServiceClient:
    """One request/response cycle per call against the Terminal.com API.

    The underlying ``httpx.Client`` is created once, here, and reused for every
    call. It is safe to share between threads; callers who want isolation can
    create one ``TerminalServiceClient`` per thread instead.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        http_client: httpx.Client | None = None,
        debug_stream: TextIO | None = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.base_url
        self.api_version = self.settings.api_version
        self._debug_stream = debug_stream
        self.http = http_client or httpx.Client(
            base_url=self.base_url,
            headers={"User-Agent": self.settings.user_agent},
        )

    def __enter__(self) -> "TerminalServiceClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    def build_path(self, path: str) -> str:
        return f"/{self.api_version}/{path.lstrip('/')}"

    def _emit_curl(self, full_path: str, body: str) -> None:
        if not self.settings.curl_debug:
            return
        stream = self._debug_stream or sys.stderr
        print(curl_command(f"{self.base_url}{full_path}", body), file=stream)

    def call(self, path: str, payload: dict[str, Any]) -> Any:
        full_path = self.build_path(path)
        body = json.dumps(payload)
        self._emit_curl(full_path, body)

        start = time.perf_counter()
        try:
            response = self.http.post(full_path, content=body.encode("utf-8"), headers=HEADERS)
        except (httpx.TransportError, OSError) as exc:
            logger.warning("POST %s failed: %s: %s", full_path, type(exc).__name__, exc)
            raise NetworkError(exc, path=full_path) from exc
        latency_ms = (time.perf_counter() - start) * 1000
        logger.debug("POST %s status=%s latency_ms=%.2f", full_path, response.status_code, latency_ms)

        if response.status_code != 200:
            raise RemoteError(response.status_code, response.text, path=full_path)

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteError(response.status_code, response.text, path=full_path) from exc
        return normalize_timestamps(data)
