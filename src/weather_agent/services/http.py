"""
Shared HTTP session factory.

Provides a pre-configured ``requests.Session`` with a default timeout
injected into every request. Upstream failures are surfaced to the caller on
the first attempt: the mounted adapter is built with ``Retry(total=0)`` so
urllib3 never retries behind our back.

Usage::

    from weather_agent.services.http import create_session

    s = create_session(timeout=10)
    resp = s.get("https://api.weatherapi.com/v1/ip.json", params={...})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from weather_agent import __version__

#: No automatic retries; a failed attempt goes straight back to the caller.
NO_RETRY = Retry(total=0, raise_on_status=False)

DEFAULT_TIMEOUT = 10  # seconds

USER_AGENT = f"weather-agent/{__version__}"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the retry adapter mounted.

    Args:
        retry: Retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Wrap send so callers don't need to pass ``timeout=`` every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
