"""
HTTP access to external catalogs.

This package holds the shared httpx client factory and the JSON
request helper used by every source adapter.
"""

from .fetcher import FetchResult, build_client, github_headers, request_json

__all__ = [
    "FetchResult",
    "build_client",
    "github_headers",
    "request_json",
]
