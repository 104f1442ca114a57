"""Domain models for the Nature Remo registry response."""

from remo_exporter.models.device import (
    EVENT_CODES,
    DeviceSnapshot,
    Measurement,
    SensorBundle,
    SensorReading,
    decode_devices,
)

__all__ = [
    "EVENT_CODES",
    "DeviceSnapshot",
    "Measurement",
    "SensorBundle",
    "SensorReading",
    "decode_devices",
]
