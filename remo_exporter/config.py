"""Centralized configuration loaded from environment variables.

Built once at startup and passed explicitly to both HTTP clients.  The
InfluxDB credential scheme is resolved here, exactly once, into one of
two closed variants (:class:`TokenAuth` or :class:`BasicAuth`).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from remo_exporter.exceptions import ConfigError

DEFAULT_INTERVAL_SECONDS = 30
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class TokenAuth:
    """InfluxDB API token, sent as ``Authorization: Token <token>``."""

    token: str = field(repr=False)

    scheme = "token"


@dataclass(frozen=True)
class BasicAuth:
    """Username/password pair, sent as HTTP Basic authentication."""

    username: str
    password: str = field(repr=False)

    scheme = "basic"


InfluxAuth = TokenAuth | BasicAuth


def _get(environ: Mapping[str, str], name: str) -> str | None:
    # Empty strings count as unset
    value = environ.get(name)
    return value or None


def _require(environ: Mapping[str, str], name: str) -> str:
    value = _get(environ, name)
    if value is None:
        raise ConfigError(f"`{name}` is not set")
    return value


def _require_url(environ: Mapping[str, str], name: str) -> str:
    value = _require(environ, name)
    try:
        parts = urlsplit(value)
        host = parts.hostname
    except ValueError:
        host = None
    if host is None or parts.scheme not in ("http", "https"):
        raise ConfigError(f"`{name}` is not a valid URL: {value!r}")
    return value


def resolve_influx_auth(environ: Mapping[str, str]) -> InfluxAuth:
    """Pick the sink credential scheme: API token first, then basic auth."""
    token = _get(environ, "INFLUX_API_TOKEN")
    if token is not None:
        return TokenAuth(token=token)

    username = _get(environ, "INFLUX_USERNAME")
    password = _get(environ, "INFLUX_PASSWORD")
    if username is not None and password is not None:
        return BasicAuth(username=username, password=password)

    raise ConfigError(
        "either `INFLUX_API_TOKEN` or `INFLUX_USERNAME` and `INFLUX_PASSWORD` must be defined"
    )


@dataclass(frozen=True)
class ExporterConfig:
    """Connection settings for the registry and the time-series sink."""

    remo_token: str = field(repr=False)
    influx_url: str
    influx_bucket: str
    influx_org: str
    influx_auth: InfluxAuth

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExporterConfig:
        """Build configuration from environment variables.

        Raises :class:`ConfigError` naming the first missing variable, when
        ``INFLUX_URL`` is not an http(s) URL with a host, or when no usable
        InfluxDB credential is configured.
        """
        env = os.environ if environ is None else environ
        return cls(
            remo_token=_require(env, "NATURE_REMO_API_TOKEN"),
            influx_url=_require_url(env, "INFLUX_URL"),
            influx_bucket=_require(env, "INFLUX_BUCKET"),
            influx_org=_require(env, "INFLUX_ORG"),
            influx_auth=resolve_influx_auth(env),
        )


def interval_from_env(environ: Mapping[str, str] | None = None) -> int:
    """Poll interval fallback used when ``--interval`` is not given."""
    env = os.environ if environ is None else environ
    raw = _get(env, "INTERVAL_SECONDS")
    if raw is None:
        return DEFAULT_INTERVAL_SECONDS
    try:
        interval = int(raw)
    except ValueError as exc:
        raise ConfigError(f"`INTERVAL_SECONDS` must be an integer, got {raw!r}") from exc
    if interval < 1:
        raise ConfigError(f"`INTERVAL_SECONDS` must be at least 1, got {interval}")
    return interval


def configure_logging(level: str | None = None) -> None:
    """Set up structured logging based on ``LOG_LEVEL``."""
    if level is None:
        level = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
