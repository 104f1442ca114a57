"""Shared fixtures for the remo-exporter test suite.

Provides registry device documents, decoded snapshots, environment
mappings, and a resolved configuration used across the unit tests.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from remo_exporter.config import ExporterConfig, TokenAuth
from remo_exporter.models.device import DeviceSnapshot


# ---------------------------------------------------------------------------
# Registry documents
# ---------------------------------------------------------------------------

_FULL_DEVICE: dict[str, Any] = {
    "name": "Bedroom",
    "id": "6d0ea9b6-3d2a-4c1b-9d0e-7f1e2a3b4c5d",
    "created_at": "2023-05-01T10:00:00Z",
    "updated_at": "2024-01-01T08:30:00Z",
    "mac_address": "aa:bb:cc:dd:ee:ff",
    "bt_mac_address": "aa:bb:cc:dd:ee:00",
    "serial_number": "1W320070000000",
    "firmware_version": "Remo/1.10.0",
    "temperature_offset": 0,
    "humidity_offset": 0,
    "users": [],
    "newest_events": {
        "te": {"val": 21.3, "created_at": "2024-01-01T08:29:10Z"},
        "hu": {"val": 45, "created_at": "2024-01-01T08:29:20Z"},
        "il": {"val": 120.5, "created_at": "2024-01-01T08:29:30Z"},
        "mo": {"val": 1, "created_at": "2024-01-01T08:00:00.750Z"},
    },
    "online": True,
}


def make_device_doc(name: str = "Bedroom", **events: dict[str, Any] | None) -> dict[str, Any]:
    """Return a device document; ``events`` replaces ``newest_events`` when given."""
    doc = copy.deepcopy(_FULL_DEVICE)
    doc["name"] = name
    if events:
        doc["newest_events"] = {code: ev for code, ev in events.items() if ev is not None}
    return doc


@pytest.fixture()
def full_device_doc() -> dict[str, Any]:
    """A device that reports all four sensors."""
    return make_device_doc()


@pytest.fixture()
def bare_device_doc() -> dict[str, Any]:
    """A device with no readings and no optional metadata."""
    doc = make_device_doc("Hallway")
    doc["newest_events"] = {}
    del doc["bt_mac_address"]
    del doc["online"]
    return doc


@pytest.fixture()
def living_device_doc() -> dict[str, Any]:
    """A device named ``Living`` with only a temperature reading."""
    return make_device_doc(
        "Living",
        te={"val": 23.5, "created_at": "2024-01-01T00:00:00+09:00"},
    )


@pytest.fixture()
def full_snapshot(full_device_doc: dict[str, Any]) -> DeviceSnapshot:
    return DeviceSnapshot.model_validate(full_device_doc)


# ---------------------------------------------------------------------------
# Environment / configuration
# ---------------------------------------------------------------------------


@pytest.fixture()
def base_env() -> dict[str, str]:
    """Required variables only; no InfluxDB credential."""
    return {
        "NATURE_REMO_API_TOKEN": "remo-secret",
        "INFLUX_URL": "http://influxdb:8086",
        "INFLUX_BUCKET": "home",
        "INFLUX_ORG": "family",
    }


@pytest.fixture()
def token_env(base_env: dict[str, str]) -> dict[str, str]:
    return {**base_env, "INFLUX_API_TOKEN": "influx-secret"}


@pytest.fixture()
def config() -> ExporterConfig:
    return ExporterConfig(
        remo_token="remo-secret",
        influx_url="http://influxdb:8086",
        influx_bucket="home",
        influx_org="family",
        influx_auth=TokenAuth(token="influx-secret"),
    )
