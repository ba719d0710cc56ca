"""
Remote JSON fetch.

One GET, one status check, one JSON parse. Failures surface as FetchFailure or
ParseFailure so loaders can report the stage that broke. No retries: a link
either resolves on first load or the viewer sees the bundled default.
"""

import time
from typing import Any

import httpx

from cvlink.contexts.transport.logger import log_fetch_result, log_fetch_start
from cvlink.exceptions import FetchFailure, ParseFailure
from cvlink.settings import SETTINGS


def create_client(**kwargs) -> httpx.AsyncClient:
    """Create an AsyncClient with the configured timeout and redirect policy."""
    options = {
        "timeout": SETTINGS["http"]["timeout_s"],
        "follow_redirects": SETTINGS["http"]["follow_redirects"],
    }
    options.update(kwargs)
    return httpx.AsyncClient(**options)


async def _get(client: httpx.AsyncClient, url: str, source: str = None) -> httpx.Response:
    log_fetch_start(url)
    start = time.perf_counter()

    try:
        response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchFailure(f"Failed to fetch {url}: {e}", url=url, source=source) from e

    log_fetch_result(url, response.status_code, time.perf_counter() - start)

    if not response.is_success:
        raise FetchFailure(
            f"Failed to fetch {url}: {response.status_code} {response.reason_phrase}",
            url=url,
            status_code=response.status_code,
            source=source,
        )
    return response


async def fetch_json(url: str, client: httpx.AsyncClient = None, source: str = None) -> Any:
    """
    Fetch a URL and parse its body as JSON.

    Args:
        url: Absolute URL to fetch
        client: Shared client; a short-lived one is created when omitted
        source: Provenance tag attached to failures

    Returns:
        Parsed JSON value (any type; shape checks belong to the caller)

    Raises:
        FetchFailure: Network error or non-2xx status
        ParseFailure: Body is not valid JSON
    """
    if not url:
        raise FetchFailure("Failed to fetch: empty URL", url=url, source=source)

    if client is None:
        async with create_client() as own_client:
            response = await _get(own_client, url, source)
    else:
        response = await _get(client, url, source)

    try:
        return response.json()
    except ValueError as e:
        raise ParseFailure(f"Invalid JSON from {url}: {e}", source=source) from e
    except RecursionError as e:
        raise ParseFailure(f"Invalid JSON from {url}: nesting too deep", source=source) from e
