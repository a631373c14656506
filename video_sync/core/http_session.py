"""Pooled HTTP sessions for the YouTube Data API."""

import re
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from video_sync import __version__

# Throttling and server errors are retried; the last response is returned as-is
RETRY_STATUSES = (429, 500, 502, 503, 504)

_sessions: dict[str, requests.Session] = {}

_SECRET_PARAM = re.compile(r"((?:api_?)?key|token)=[^&\s]+", re.IGNORECASE)


def get_session(name: str = "youtube", max_retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """
    Get or create the pooled session registered under ``name``.

    Args:
        name: Pool name, one session per upstream service
        max_retries: Retries on connection errors and RETRY_STATUSES
        backoff_factor: Exponential backoff base between retries

    Returns:
        Shared requests.Session
    """
    session = _sessions.get(name)
    if session is not None:
        return session

    retry = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)

    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"User-Agent": f"video-sync/{__version__}", "Accept": "application/json"})

    _sessions[name] = session
    return session


def get(url: str, timeout: float, session_name: str = "youtube", **kwargs: Any) -> requests.Response:
    """GET through the named pool. A timeout is mandatory so no page fetch can hang."""
    return get_session(session_name).get(url, timeout=timeout, **kwargs)


def close_all_sessions() -> None:
    """Close every pooled session (called on shutdown)."""
    for session in _sessions.values():
        session.close()
    _sessions.clear()


def redact_secrets(text: str) -> str:
    """Mask API keys embedded in URLs (requests puts the full URL in its errors)."""
    return _SECRET_PARAM.sub(r"\1=***", text)
