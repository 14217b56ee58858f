from __future__ import annotations

"""Lightweight async HTTP client util with retry.

Uses httpx so the price feed fetch is a suspension point on the app's event
loop. Focus: GET JSON with limited retries. ``transport`` lets callers (tests)
inject an ``httpx.MockTransport``.
"""
import asyncio
from typing import Any, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    timeout: float = 5.0,
    retries: int = 0,
    backoff: float = 0.5,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    last_err: Optional[Exception] = None
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        for attempt in range(retries + 1):
            try:
                resp = await client.get(url)
                if resp.status_code >= 400:
                    raise HttpError(f"HTTP {resp.status_code} for {url}")
                return resp.json()
            except (
                httpx.HTTPError,
                HttpError,
                ValueError,
                RecursionError,
            ) as e:  # ValueError / RecursionError for JSON decode
                last_err = e
                if attempt == retries:
                    break
                await asyncio.sleep(backoff * (2**attempt))
    raise HttpError(f"Failed to fetch JSON from {url}: {last_err}")
