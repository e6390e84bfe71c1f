# ABOUTME: HTTP client factory shared by the forecast and geocoding clients.
# ABOUTME: Turns a ClientConfig into a configured httpx.AsyncClient.

import httpx

from weather_dashboard.config import ClientConfig


def create_http_client(config: ClientConfig) -> httpx.AsyncClient:
    """Create an httpx client bound to the config's base URL, timeout, and headers.

    No retry transport is installed: a failed request surfaces immediately.
    """
    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=httpx.Timeout(config.timeout_seconds),
        headers=config.headers,
    )
