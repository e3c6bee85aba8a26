"""HTTP round trips against the portal."""
import asyncio
from collections.abc import Mapping
import logging

import aiohttp

from .exceptions import EmptyResponseError, PortalTransportError

_LOGGER = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def fetch_text(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    timeout: float,
    data: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> str:
    """Send one request and return the response body.

    Raises PortalTransportError when the portal cannot be reached, times out
    answers with an error status or sends a body that cannot be decoded, and EmptyResponseError for an empty body.
    """
    request_headers = dict(headers or {})
    if data is not None:
        request_headers.setdefault("Content-Type", FORM_CONTENT_TYPE)

    try:
        async with session.request(
            method,
            url,
            data=data,
            headers=request_headers,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as response:
            if response.status >= 400:
                raise PortalTransportError(f"{method} {url} failed with status {response.status}")
            try:
                html = await response.text()
            except UnicodeDecodeError as err:
                raise PortalTransportError(f"{method} {url} returned an undecodable body: {err}") from err
    except asyncio.TimeoutError as err:
        raise PortalTransportError(f"{method} {url} timed out after {timeout} seconds") from err
    except aiohttp.ClientError as err:
        raise PortalTransportError(f"{method} {url} failed: {err}") from err

    if not html or not html.strip():
        raise EmptyResponseError(f"{method} {url} returned no data")

    _LOGGER.debug("%s %s returned %d characters", method, url, len(html))
    return html
