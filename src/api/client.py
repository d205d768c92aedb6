# thin async wrapper over requests, shared by every backend call
import asyncio
from typing import Any, Dict, Optional

import requests

from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)


class ApiError(Exception):
    """Raised for any failed or malformed backend exchange."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


def _request(method: str, url: str, payload: Optional[dict] = None) -> Dict[str, Any]:
    _logger.debug(f"{method} {url}")
    try:
        resp = requests.request(
            method,
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=config.REQUEST_TIMEOUT,
        )
        resp.raise_for_status()
    except requests.RequestException as e:
        raise ApiError(f"{method} {url} failed: {e}", url) from e

    try:
        data = resp.json()
    except ValueError as e:
        raise ApiError(f"{method} {url} returned invalid JSON", url) from e

    if not isinstance(data, dict):
        raise ApiError(f"{method} {url} returned {type(data).__name__}, not an object", url)
    return data


async def get_json(url: str) -> Dict[str, Any]:
    """GET url and return the decoded JSON object."""
    return await asyncio.to_thread(_request, "GET", url)


async def post_json(url: str, payload: dict) -> Dict[str, Any]:
    """POST payload as JSON to url and return the decoded JSON object."""
    return await asyncio.to_thread(_request, "POST", url, payload)
