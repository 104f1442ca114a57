"""Decoded shape of a device as reported by the Nature Remo registry.

``GET /1/devices`` returns a JSON array of device objects.  Only the
``name`` and the ``newest_events`` bundle are forwarded downstream; the
remaining metadata is validated purely to check the response shape.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import StrEnum
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

from remo_exporter.exceptions import DecodeError


class Measurement(StrEnum):
    """Time-series measurement names, in emission order."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    ILLUMINATION = "illumination"
    MOVEMENT = "movement"


# Registry event code for each measurement slot.
EVENT_CODES: dict[Measurement, str] = {
    Measurement.TEMPERATURE: "te",
    Measurement.HUMIDITY: "hu",
    Measurement.ILLUMINATION: "il",
    Measurement.MOVEMENT: "mo",
}

# JSON numbers only (no booleans, no numeric strings), widened to float.
Number = Annotated[StrictFloat | StrictInt, AfterValidator(float)]


class SensorReading(BaseModel):
    """The newest value the registry holds for one measured quantity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: Number = Field(alias="val")
    observed_at: AwareDatetime = Field(alias="created_at")


class SensorBundle(BaseModel):
    """Up to four independent readings; an absent slot is ``None``.

    A device without a given sensor (e.g. no motion sensor) simply never
    reports that slot.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    temperature: SensorReading | None = Field(default=None, alias="te")
    humidity: SensorReading | None = Field(default=None, alias="hu")
    illumination: SensorReading | None = Field(default=None, alias="il")
    movement: SensorReading | None = Field(default=None, alias="mo")

    def get(self, measurement: Measurement) -> SensorReading | None:
        return getattr(self, measurement.value)

    def readings(self) -> Iterator[tuple[Measurement, SensorReading]]:
        """Yield the present readings in fixed measurement order."""
        for measurement in Measurement:
            reading = self.get(measurement)
            if reading is not None:
                yield measurement, reading


class DeviceSnapshot(BaseModel):
    """One device's current state as returned by ``GET /1/devices``."""

    model_config = ConfigDict(frozen=True)

    name: str
    id: str
    created_at: AwareDatetime
    updated_at: AwareDatetime
    mac_address: str
    serial_number: str
    firmware_version: str
    temperature_offset: Number
    humidity_offset: Number
    newest_events: SensorBundle
    bt_mac_address: str | None = None
    online: StrictBool | None = None


_DEVICE_LIST = TypeAdapter(list[DeviceSnapshot])


def _location(loc: tuple[int | str, ...]) -> str:
    return "devices" + "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in loc)


def decode_devices(payload: Any) -> list[DeviceSnapshot]:
    """Decode the ``/1/devices`` array.  All devices decode or none do."""
    try:
        return _DEVICE_LIST.validate_python(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise DecodeError(
            f"{_location(first['loc'])}: {first['msg']} ({exc.error_count()} error(s))"
        ) from exc
