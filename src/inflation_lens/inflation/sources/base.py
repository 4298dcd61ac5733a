from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote, urlencode

from inflation_lens.config import FetchConfig
from inflation_lens.inflation.models import FetchRequest, MetricDefinition, Observation

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """A provider request failed (transport error or non-2xx response)."""

    def __init__(self, provider: str, message: str, status: int | None = None):
        super().__init__(f"{provider} request failed: {message}")
        self.provider = provider
        self.status = status


class InflationProvider(Protocol):
    name: str
    metrics: list[MetricDefinition]

    def fetch(self, request: FetchRequest) -> list[Observation]:
        """
        Return observations normalized to {date, value}, ascending by date,
        with non-finite values removed.
        """
        ...


def build_proxied_url(target_url: str, proxy_base: str | None) -> str:
    """
    Route a request through an optional proxy template.

    - "{urlEncoded}" in the template -> replaced by the percent-encoded URL
    - "{url}" -> replaced by the raw URL
    - any other non-empty template -> encoded URL appended
    - no template -> the target URL unchanged
    """
    trimmed = (proxy_base or "").strip()
    if not trimmed:
        return target_url
    if "{urlEncoded}" in trimmed:
        return trimmed.replace("{urlEncoded}", quote(target_url, safe=""))
    if "{url}" in trimmed:
        return trimmed.replace("{url}", target_url)
    return f"{trimmed}{quote(target_url, safe='')}"


def with_query(url: str, params: dict[str, Any] | None) -> str:
    if not params:
        return url
    return f"{url}?{urlencode(params, safe=',:')}"


def get_json(provider: str, url: str, *, config: FetchConfig) -> Any:
    """
    GET a JSON document, raising ProviderError on any transport/HTTP failure.

    The full query string is baked into `url` before proxying so proxy
    templates see the complete target.
    """
    # Lazy import so unit tests / restricted environments can import this module
    # without triggering SSL/cert initialization.
    import requests
    from requests.exceptions import RequestException

    full_url = build_proxied_url(url, config.proxy_url)
    logger.debug("%s GET %s", provider, full_url)
    try:
        r = requests.get(full_url, timeout=config.timeout)
    except RequestException as e:
        logger.warning("%s request error: %s", provider, e)
        raise ProviderError(provider, str(e)) from e

    if not r.ok:
        raise ProviderError(provider, f"HTTP {r.status_code}", status=r.status_code)
    try:
        return r.json()
    except ValueError as e:
        raise ProviderError(provider, "invalid JSON payload", status=r.status_code) from e


def to_float(x: Any) -> float | None:
    """Coerce a payload value to float; None for null / non-numeric / non-finite."""
    if x is None or isinstance(x, bool):
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    if v != v or v in (float("inf"), float("-inf")):
        return None
    return v
