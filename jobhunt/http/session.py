"""Shared HTTP session for source adapters.

Every outbound call goes through ``HttpSession``:
  - one attempt per call, no retries
  - fixed total deadline per call (15s by default), covering the whole body
  - timeouts, connection errors and non-2xx responses all collapse to None
"""

import asyncio
import logging
from types import TracebackType
from typing import Any

import httpx

from jobhunt.core.config import HttpConfig

logger = logging.getLogger(__name__)


class HttpSession:
    """Async context manager that owns one ``httpx.AsyncClient``.

    Usage::

        async with HttpSession(config) as http:
            html = await http.get_text("https://...")
            if html is None:
                ...  # error or no data, handled the same way
    """

    def __init__(
        self,
        config: HttpConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """The underlying client. Raises if not entered."""
        if self._client is None:
            msg = "HttpSession not entered — use 'async with'"
            raise RuntimeError(msg)
        return self._client

    @property
    def timeout_s(self) -> float:
        return self._config.timeout_s

    def default_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self._config.accept_language,
        }

    async def __aenter__(self) -> "HttpSession":
        self._client = httpx.AsyncClient(
            headers=self.default_headers(),
            timeout=self._config.timeout_s,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_text(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str | None:
        """GET a page body as text, or None on any failure."""
        response = await self._send("GET", url, params=params, headers=headers)
        return response.text if response is not None else None

    async def get_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        """GET and decode JSON, or None on any failure (including bad JSON)."""
        merged = {"Accept": "application/json", **(headers or {})}
        response = await self._send("GET", url, params=params, headers=merged)
        return _decode_json(response, url)

    async def post_json(
        self,
        url: str,
        payload: Any,
        *,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        """POST a JSON body and decode the JSON reply, or None on any failure."""
        merged = {"Accept": "application/json", **(headers or {})}
        response = await self._send("POST", url, json=payload, headers=merged)
        return _decode_json(response, url)

    async def _send(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response | None:
        try:
            response = await asyncio.wait_for(
                self.client.request(method, url, **kwargs), timeout=self.timeout_s,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning("%s %s timed out after %.0fs", method, url, self.timeout_s)
            return None
        except httpx.HTTPStatusError as e:
            logger.warning("%s %s returned HTTP %d", method, url, e.response.status_code)
            return None
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return None
        return response


def _decode_json(response: httpx.Response | None, url: str) -> Any | None:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning("Response from %s is not valid JSON", url)
        return None
