"""Simple HTTP client utilities using httpx.

Both downstream calls of the relay (completion API and message store)
are single JSON POSTs, so they share this helper.  Callers may pass a
long-lived ``httpx.AsyncClient``; otherwise a client is opened for the
duration of the request.
"""

from __future__ import annotations

import httpx
from typing import Any, Dict


async def post_json(
    url: str,
    payload: Any,
    *,
    headers: Dict[str, str],
    timeout: float,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """Perform an asynchronous HTTP POST request with a JSON body.

    Transport failures and timeouts propagate as ``httpx.RequestError``.
    """
    if client is not None:
        return await client.post(url, json=payload, headers=headers, timeout=timeout)
    async with httpx.AsyncClient(timeout=timeout) as owned_client:
        return await owned_client.post(url, json=payload, headers=headers)
