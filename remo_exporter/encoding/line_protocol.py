"""Point encoder: device snapshots to InfluxDB line-protocol records.

Each present sensor reading becomes one line::

    <measurement>,name=<device-name> val=<value> <unix-seconds>

The device name is embedded verbatim.  Names containing a comma, space,
equals sign or newline will corrupt the line; no escaping is applied.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from remo_exporter.models.device import DeviceSnapshot

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)


def to_unix_seconds(moment: datetime) -> int:
    """Whole seconds since the epoch, flooring any sub-second part."""
    return (moment - _EPOCH) // _ONE_SECOND


def format_value(value: float) -> str:
    """Render a field value the way the registry reported it.

    Integral floats drop the trailing ``.0`` (``1.0`` -> ``1``); everything
    else uses the shortest round-tripping ``repr``, so very small
    magnitudes keep exponent notation (``1e-07``), which InfluxDB accepts
    for float fields.
    """
    if value.is_integer():
        return str(int(value))
    return repr(value)


def encode_device(snapshot: DeviceSnapshot) -> list[str]:
    """Encode one snapshot into zero to four records, in fixed order."""
    return [
        f"{measurement.value},name={snapshot.name} "
        f"val={format_value(reading.value)} {to_unix_seconds(reading.observed_at)}"
        for measurement, reading in snapshot.newest_events.readings()
    ]


def encode_devices(snapshots: Iterable[DeviceSnapshot]) -> list[str]:
    """Flatten the records of many snapshots into one batch."""
    records: list[str] = []
    for snapshot in snapshots:
        records.extend(encode_device(snapshot))
    return records
