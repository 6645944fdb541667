"""Shared HTTP client construction."""

import httpx

from coachai.config import ClientSettings

JSON_CONTENT_TYPE = "application/json"


def default_headers(settings: ClientSettings) -> dict[str, str]:
    """Headers sent with every request, authenticated or not."""
    headers = {"Content-Type": JSON_CONTENT_TYPE}
    headers.update(settings.extra_headers)
    return headers


def create_http_client(
    settings: ClientSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the AsyncClient shared by the session manager and API client.

    Args:
        settings: Client settings (base URL, timeout, TLS, headers)
        transport: Optional transport override, e.g. an ASGI app in tests

    Returns:
        A configured httpx.AsyncClient; the caller owns closing it
    """
    return httpx.AsyncClient(
        base_url=settings.base_url,
        headers=default_headers(settings),
        timeout=httpx.Timeout(settings.request_timeout),
        verify=settings.verify_tls,
        transport=transport,
    )
