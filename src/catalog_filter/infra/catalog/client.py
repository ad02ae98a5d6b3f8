from __future__ import annotations

import threading

import httpx

from catalog_filter.infra.catalog.config import catalog_base_url, catalog_timeout_seconds

# Lazy initialization - only create the client when the first request needs it
_client: httpx.Client | None = None
# Sync routes run in a threadpool; creation and shutdown must not race
_client_lock = threading.Lock()


def get_http_client() -> httpx.Client:
    """
    Get or create the upstream catalog HTTP client (lazy initialization).

    The client is a connection pool shared by all requests. It holds no
    pagination state: continuation state always travels with the request.

    Connection Pool Configuration:
    - max_connections: Upper bound on concurrent upstream connections
    - max_keepalive_connections: Idle connections kept for reuse
    - timeout: Applied to connect, read, write and pool acquisition
    """
    global _client
    if _client is not None:
        return _client

    with _client_lock:
        if _client is None:
            _client = httpx.Client(
                base_url=catalog_base_url(),
                timeout=httpx.Timeout(catalog_timeout_seconds()),
                limits=httpx.Limits(
                    max_connections=30,
                    max_keepalive_connections=10,
                ),
                headers={"Accept": "application/json"},
            )
        return _client


def close_http_client() -> None:
    """Close the shared client (application shutdown)."""
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None
