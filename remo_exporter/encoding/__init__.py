"""Line-protocol encoding of device snapshots."""

from remo_exporter.encoding.line_protocol import (
    encode_device,
    encode_devices,
    format_value,
    to_unix_seconds,
)

__all__ = [
    "encode_device",
    "encode_devices",
    "format_value",
    "to_unix_seconds",
]
