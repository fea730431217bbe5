from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import aiohttp
from loguru import logger

JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}

# ─── Errors ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class HttpError(Exception):
    status: int  # 0 when no response was received
    body: str

    def __str__(self) -> str:
        return f"HTTP {self.status}: {self.body}"

    @property
    def message(self) -> str | None:
        """The ``message`` field of a JSON error body, if there is one."""
        try:
            data = json.loads(self.body)
        except ValueError:
            return None
        match data:
            case {"message": str() as message} if message:
                return message
            case _:
                return None


# ─── Client ──────────────────────────────────────────────────────────


class HttpClient:
    """JSON-over-HTTP session bound to one base URL.

    Non-2xx statuses, connection failures and timeouts all raise HttpError.
    Bodies that are not valid JSON raise ValueError.
    """

    def __init__(self, base_url: str, *, timeout: float | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._log = logger.bind(component="http")

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | list[Any] | None = None,
    ) -> Any:
        session = await self._ensure_session()
        url = f"{self._base_url}{path}"
        self._log.debug("{method} {path}", method=method, path=path)

        try:
            async with session.request(method, url, headers=JSON_HEADERS, json=json) as resp:
                if resp.status >= 400:
                    body = await resp.text(errors="replace")
                    self._log.warning(
                        "HTTP {status} from {url}: {body}",
                        status=resp.status, url=url, body=body[:500],
                    )
                    raise HttpError(status=resp.status, body=body)
                raw = await resp.read()
                return await resp.json(content_type=None) if raw else None
        except aiohttp.ClientResponseError as e:
            raise HttpError(status=e.status, body=e.message) from e
        except aiohttp.ClientError as e:
            raise HttpError(status=0, body=str(e)) from e
        except TimeoutError as e:
            self._log.warning("{method} {path} timed out", method=method, path=path)
            raise HttpError(status=0, body="Request timed out") from e

    # ─── Lifecycle ───────────────────────────────────────────────────

    async def close(self) -> None:
        if self._session and not self._session.closed:
            self._log.debug("Closing HTTP session")
            await self._session.close()

    async def __aenter__(self) -> HttpClient:
        await self._ensure_session()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()
