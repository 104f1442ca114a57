"""HTTP clients for the device registry and the time-series sink."""

from remo_exporter.clients.influx import InfluxTokenAuth, InfluxWriter
from remo_exporter.clients.nature_remo import NatureRemoClient

__all__ = [
    "InfluxTokenAuth",
    "InfluxWriter",
    "NatureRemoClient",
]
