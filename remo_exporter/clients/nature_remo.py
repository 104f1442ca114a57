"""Telemetry client for the Nature Remo cloud API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import requests
from requests.exceptions import RequestException

from remo_exporter.exceptions import UpstreamError
from remo_exporter.models.device import DeviceSnapshot, decode_devices

if TYPE_CHECKING:
    from remo_exporter.config import ExporterConfig

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.nature.global"
_DEVICES_PATH = "/1/devices"


class NatureRemoClient:
    """Fetches the device list with a bearer token.

    One GET per :meth:`poll`; no retries, no partial results.  The session
    carries no explicit timeout, so a hung connection stalls the caller
    until the transport gives up.
    """

    def __init__(
        self,
        config: ExporterConfig,
        api_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
    ) -> None:
        self._devices_url = api_url.rstrip("/") + _DEVICES_PATH
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {config.remo_token}",
                "Accept": "application/json",
            }
        )

    @property
    def devices_url(self) -> str:
        return self._devices_url

    def poll(self) -> list[DeviceSnapshot]:
        """Return every device the token can see.

        Raises :class:`UpstreamError` on transport failure or non-2xx
        status, and :class:`DecodeError` when the body does not match the
        device shape.
        """
        try:
            response = self._session.get(self._devices_url)
        except RequestException as exc:
            raise UpstreamError(f"GET {self._devices_url} failed: {exc}") from exc

        if not response.ok:
            raise UpstreamError(
                f"GET {self._devices_url} returned {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"GET {self._devices_url} returned a non-JSON body: {exc}",
                status_code=response.status_code,
            ) from exc

        devices = decode_devices(payload)
        logger.debug("Polled %d devices from %s", len(devices), self._devices_url)
        return devices

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
