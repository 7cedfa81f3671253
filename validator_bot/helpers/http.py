"""HTTP client utilities and helpers."""

from typing import Any

import httpx

from validator_bot.helpers.constants import DEFAULT_TIMEOUT
from validator_bot.helpers.logging import get_logger


logger = get_logger(__name__)


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from validator_bot.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            response = await client.get("https://example.com")
        ```
    """
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: dict[str, Any] | None = None,
    timeout: float | None = None,
    raise_for_status: bool = True,
) -> dict[str, Any] | list[Any] | None:
    """Fetch JSON data from a URL.

    Args:
        client: HTTP client instance
        url: URL to fetch
        params: Optional query parameters
        timeout: Optional timeout override
        raise_for_status: Whether to raise on HTTP errors

    Returns:
        Parsed JSON data or None on error

    Example:
        ```python
        async with httpx.AsyncClient() as client:
            data = await fetch_json(client, "https://api.example.com/data")
            if data:
                print(data)
        ```
    """
    try:
        if timeout is None:
            response = await client.get(url, params=params)
        else:
            response = await client.get(url, params=params, timeout=timeout)
        if raise_for_status:
            response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            logger.debug("URL not found: %s", url)
        else:
            logger.warning("HTTP error fetching %s: %s", url, e)
        return None
    except httpx.HTTPError as e:
        logger.warning("HTTP error fetching %s: %s", url, e)
        return None
    except Exception:
        logger.exception("Error fetching %s", url)
        return None


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    data: dict[str, Any],
    *,
    timeout: float | None = None,
    raise_for_status: bool = True,
) -> dict[str, Any] | list[Any] | None:
    """Post JSON data to a URL and return JSON response.

    Args:
        client: HTTP client instance
        url: URL to post to
        data: JSON data to post
        timeout: Optional timeout override
        raise_for_status: Whether to raise on HTTP errors

    Returns:
        Parsed JSON response or None on error
    """
    try:
        if timeout is None:
            response = await client.post(url, json=data)
        else:
            response = await client.post(url, json=data, timeout=timeout)
        if raise_for_status:
            response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "HTTP error posting to %s: %s %s",
            _redact(url),
            e.response.status_code,
            e.response.text[:100] if e.response.text else "",
        )
        return None
    except httpx.HTTPError as e:
        logger.warning("HTTP error posting to %s: %s", _redact(url), type(e).__name__)
        return None
    except Exception:
        logger.exception("Error posting to %s", _redact(url))
        return None


def _redact(url: str) -> str:
    # Telegram URLs carry the bot token in the path
    parsed = httpx.URL(url)
    return f"{parsed.scheme}://{parsed.host}"


__all__ = [
    "create_http_client",
    "fetch_json",
    "post_json",
]
