"""
JSON-over-HTTP fetching for the source adapters.

All requests go through one shared ``httpx.Client`` owned by the runner.
Failures never raise: they come back as a FetchResult with ``error`` set,
and the calling adapter decides what to do with it.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import time
from typing import Any, Callable

import httpx

from ..config import FetchConfig, get_github_token


@dataclass
class FetchResult:
    """Result of an HTTP request expecting a JSON body.

    Either data will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was requested
        status_code: HTTP status code, or None if request failed before getting response
        data: Decoded JSON body, or None on error
        error: Error message if the request failed, None on success
    """

    url: str
    status_code: int | None
    data: Any
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_client(cfg: FetchConfig, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Create the HTTP client shared by all sources for one run.

    Args:
        cfg: Fetch configuration
        transport: Optional transport override (used by tests)

    Returns:
        A configured httpx.Client; the caller owns closing it
    """
    headers = {"User-Agent": cfg.user_agent, "Accept": "application/json"}
    return httpx.Client(
        timeout=cfg.timeout_seconds,
        headers=headers,
        follow_redirects=True,
        trust_env=cfg.trust_env,
        transport=transport,
    )


def github_headers(cfg: FetchConfig) -> dict[str, str]:
    token = get_github_token(cfg)
    if not token:
        return {}
    return {"Authorization": f"Bearer {token}"}


def request_json(
    client: httpx.Client,
    method: str,
    url: str,
    retries: int,
    *,
    params: dict[str, Any] | None = None,
    json_body: Any = None,
    headers: dict[str, str] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    """Send a request and decode its JSON body, retrying on failure.

    Args:
        client: Shared HTTP client
        method: "GET" or "POST"
        url: Request URL
        retries: Number of retry attempts after initial failure
        params: Query string parameters
        json_body: JSON payload for POST requests
        headers: Extra request headers
        sleep: Backoff sleep function

    Returns:
        FetchResult with decoded data on success or error message on failure
    """
    last_error: str | None = None
    last_status: int | None = None

    for attempt in range(retries + 1):
        try:
            resp = client.request(method, url, params=params, json=json_body, headers=headers)
            last_status = resp.status_code
            if 200 <= resp.status_code < 300:
                return FetchResult(url=url, status_code=resp.status_code, data=resp.json(), error=None)
            last_error = f"HTTP {resp.status_code}: {resp.text[:200]}"
        except json.JSONDecodeError as exc:
            last_error = f"JSONDecodeError: {exc}"
        except httpx.HTTPError as exc:
            last_status = None
            last_error = f"{type(exc).__name__}: {exc}"
        if attempt < retries:
            # Linear backoff: 0.5s, 1.0s, 1.5s...
            sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=last_status, data=None, error=last_error)
