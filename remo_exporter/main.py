"""CLI entrypoint for the Nature Remo -> InfluxDB exporter.

Polls the Nature Remo cloud API on a fixed interval and writes the newest
temperature, humidity, illumination and movement readings of every device
to an InfluxDB v2 bucket.

Usage::

    remo-exporter --interval 30
"""

from __future__ import annotations

import logging
import sys

import click

from remo_exporter import __version__
from remo_exporter.clients.influx import InfluxWriter
from remo_exporter.clients.nature_remo import NatureRemoClient
from remo_exporter.config import ExporterConfig, configure_logging, interval_from_env
from remo_exporter.exceptions import ConfigError, CycleError, ShutdownRequested
from remo_exporter.scheduler import ExportCycle, PollScheduler

logger = logging.getLogger(__name__)


@click.command("remo-exporter")
@click.option(
    "--interval",
    "-i",
    default=None,
    type=click.IntRange(min=1),
    help="Seconds between polls (overrides INTERVAL_SECONDS env var)  [default: 30]",
)
@click.version_option(__version__, prog_name="remo-exporter")
def main(interval: int | None) -> None:
    """Export Nature Remo sensor readings to InfluxDB.

    Connection settings are read from NATURE_REMO_API_TOKEN, INFLUX_URL,
    INFLUX_BUCKET, INFLUX_ORG and either INFLUX_API_TOKEN or
    INFLUX_USERNAME + INFLUX_PASSWORD.
    """
    configure_logging()

    # ── Configuration ───────────────────────────────────────────────────
    try:
        config = ExporterConfig.from_env()
        interval_sec = interval or interval_from_env()
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)

    logger.info(
        "Exporting to %s | bucket=%s | org=%s | auth=%s | interval=%ds",
        config.influx_url,
        config.influx_bucket,
        config.influx_org,
        config.influx_auth.scheme,
        interval_sec,
    )

    # ── Clients and scheduler ───────────────────────────────────────────
    telemetry = NatureRemoClient(config)
    sink = InfluxWriter(config)
    scheduler = PollScheduler(ExportCycle(telemetry, sink), interval_sec)

    try:
        scheduler.install_signal_handlers()
        scheduler.run()
    except ShutdownRequested:
        # Signal arrived before the scheduler loop was entered
        pass
    except CycleError as exc:
        logger.error("Exporter stopped: %s failed: %s", exc.stage, exc.cause)
        sys.exit(1)
    finally:
        telemetry.close()
        sink.close()

    logger.info("Exporter stopped after %d cycles", scheduler.cycles_completed)


if __name__ == "__main__":
    main()
