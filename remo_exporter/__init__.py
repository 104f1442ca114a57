"""Periodic exporter from the Nature Remo cloud API to InfluxDB."""

__version__ = "0.1.0"
