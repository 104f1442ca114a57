"""Metrics sink client writing line protocol to the InfluxDB v2 API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import requests
from requests.auth import AuthBase, HTTPBasicAuth
from requests.exceptions import RequestException

from remo_exporter.config import BasicAuth, TokenAuth
from remo_exporter.exceptions import UpstreamError

if TYPE_CHECKING:
    from remo_exporter.config import ExporterConfig, InfluxAuth

logger = logging.getLogger(__name__)

_WRITE_PATH = "/api/v2/write"


class InfluxTokenAuth(AuthBase):
    """Attaches ``Authorization: Token <token>`` to every request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Token {self._token}"
        return request


def requests_auth(auth: InfluxAuth) -> AuthBase:
    """Map the resolved credential variant onto a requests auth handler."""
    match auth:
        case TokenAuth(token=token):
            return InfluxTokenAuth(token)
        case BasicAuth(username=username, password=password):
            return HTTPBasicAuth(username, password)
    raise TypeError(f"unsupported InfluxDB credential: {type(auth).__name__}")


class InfluxWriter:
    """POSTs newline-joined line-protocol records to ``/api/v2/write``.

    The credential scheme is fixed at construction; every write uses the
    same bucket, org and second precision.
    """

    def __init__(
        self,
        config: ExporterConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._write_url = config.influx_url.rstrip("/") + _WRITE_PATH
        self._params = {
            "bucket": config.influx_bucket,
            "org": config.influx_org,
            "precision": "s",
        }
        self._session = session if session is not None else requests.Session()
        self._session.auth = requests_auth(config.influx_auth)
        self._session.headers.update({"Content-Type": "text/plain; charset=utf-8"})

    @property
    def write_url(self) -> str:
        return self._write_url

    def write(self, records: Sequence[str]) -> None:
        """Write one batch.  An empty batch still issues the request."""
        body = "\n".join(records)
        try:
            response = self._session.post(
                self._write_url,
                params=self._params,
                data=body.encode("utf-8"),
            )
        except RequestException as exc:
            raise UpstreamError(f"POST {self._write_url} failed: {exc}") from exc

        if not response.ok:
            raise UpstreamError(
                f"POST {self._write_url} returned {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )

        logger.debug("Wrote %d records to bucket %s", len(records), self._params["bucket"])

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
