from __future__ import annotations

import json
import logging
from typing import Any, Mapping
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .errors import NetworkError, ProviderError

LOGGER = logging.getLogger(__name__)

USER_AGENT = "weather-screen/0.1"
NETWORK_ERROR_MESSAGE = "Network request failed"


def build_url(base_url: str, params: Mapping[str, Any]) -> str:
    return f"{base_url}?{urlencode(params)}"


def fetch_json(
    base_url: str,
    params: Mapping[str, Any],
    *,
    provider_message: str,
    timeout: float | None = None,
) -> Any:
    """GET ``base_url`` with ``params`` and decode the JSON body.

    Non-success statuses and undecodable bodies raise ``ProviderError`` carrying
    ``provider_message``; transport failures raise ``NetworkError``.
    """
    url = build_url(base_url, params)
    request = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
    try:
        with urlopen(request, timeout=timeout) as response:
            body = response.read()
    except HTTPError as exc:
        LOGGER.warning("GET %s answered HTTP %s", base_url, exc.code)
        raise ProviderError(provider_message) from exc
    except (URLError, TimeoutError, OSError) as exc:
        LOGGER.warning("GET %s failed: %s", base_url, exc)
        raise NetworkError(NETWORK_ERROR_MESSAGE) from exc

    try:
        return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ProviderError(provider_message) from exc
