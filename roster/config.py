"""Configuration for roster.

Priority (highest first):
1. Environment variables (ROSTER_BACKEND_URL, ROSTER_AUTH_TOKEN, ...)
2. <data dir>/config.json
3. Dataclass defaults
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from roster.utils import get_roster_home

logger = logging.getLogger(__name__)

DEFAULT_SAVE_DELAY = 0.3  # seconds
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LANGUAGE = "en"

PLAINTEXT_HOSTS = frozenset({"localhost", "127.0.0.1"})


def validate_backend_url(url: str, *, allow_localhost_http: bool = True) -> Optional[str]:
    """Return ``url`` if the auth token may be sent to it, else ``None``.

    Only https is accepted for remote hosts; plain http is accepted for
    ``PLAINTEXT_HOSTS`` unless ``allow_localhost_http`` is false.
    """
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.scheme == "https" and parsed.netloc:
        return url
    if parsed.scheme == "http" and parsed.netloc:
        if allow_localhost_http and (parsed.hostname or "") in PLAINTEXT_HOSTS:
            return url
        logger.warning("Rejecting plaintext backend_url %s", parsed.netloc)
        return None
    logger.warning("Rejecting backend_url with scheme %r and host %r", parsed.scheme, parsed.netloc)
    return None


@dataclass
class RosterConfig:
    """Runtime settings for a roster session."""

    backend_url: Optional[str] = None
    auth_token: Optional[str] = None
    language: str = DEFAULT_LANGUAGE
    save_delay: float = DEFAULT_SAVE_DELAY  # Edit coalescer delay
    log_level: str = "INFO"
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def has_backend(self) -> bool:
        return bool(self.backend_url)


def _read_config_file() -> Dict[str, Any]:
    path = get_roster_home() / "config.json"
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return {}
    return data


def _as_float(raw: Any, default: float, name: str) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value < 0:
        logger.warning("Negative %s=%r, using %s", name, raw, default)
        return default
    return value


def load_config() -> RosterConfig:
    """Load configuration from the config file and environment."""
    file_data = _read_config_file()

    backend_url = os.environ.get("ROSTER_BACKEND_URL") or file_data.get("backend_url")
    auth_token = os.environ.get("ROSTER_AUTH_TOKEN") or file_data.get("auth_token")
    language = os.environ.get("ROSTER_LANGUAGE") or file_data.get("language") or DEFAULT_LANGUAGE
    log_level = os.environ.get("ROSTER_LOG_LEVEL") or file_data.get("log_level") or "INFO"
    save_delay = _as_float(
        os.environ.get("ROSTER_SAVE_DELAY", file_data.get("save_delay")),
        DEFAULT_SAVE_DELAY,
        "save_delay",
    )
    request_timeout = _as_float(
        os.environ.get("ROSTER_REQUEST_TIMEOUT", file_data.get("request_timeout")),
        DEFAULT_REQUEST_TIMEOUT,
        "request_timeout",
    )

    if backend_url:
        backend_url = validate_backend_url(backend_url)
        if backend_url:
            backend_url = backend_url.rstrip("/")

    return RosterConfig(
        backend_url=backend_url,
        auth_token=auth_token,
        language=language,
        save_delay=save_delay,
        log_level=log_level,
        request_timeout=request_timeout,
    )
