"""Poll scheduler and the single poll -> encode -> write cycle.

The scheduler is an explicit state machine::

    IDLE --tick--> RUNNING --success--> IDLE
    RUNNING --error--> TERMINATED (error propagates)
    IDLE | RUNNING --shutdown--> TERMINATED

Ticks never overlap: the next tick is measured from the start of the
previous one, so a slow cycle only delays the following tick.
"""

from __future__ import annotations

import logging
import signal
import threading
import time
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING

from remo_exporter.encoding.line_protocol import encode_devices
from remo_exporter.exceptions import CycleError, ExporterError, ShutdownRequested

if TYPE_CHECKING:
    from remo_exporter.clients.influx import InfluxWriter
    from remo_exporter.clients.nature_remo import NatureRemoClient

logger = logging.getLogger(__name__)


class SchedulerState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"
    TERMINATED = "terminated"


class ExportCycle:
    """One poll -> encode -> write pass; stateless between calls."""

    def __init__(self, telemetry: NatureRemoClient, sink: InfluxWriter) -> None:
        self._telemetry = telemetry
        self._sink = sink

    def __call__(self) -> int:
        """Run the cycle and return the number of records written."""
        try:
            devices = self._telemetry.poll()
        except ExporterError as exc:
            raise CycleError("poll", exc) from exc

        records = encode_devices(devices)

        try:
            self._sink.write(records)
        except ExporterError as exc:
            raise CycleError("write", exc) from exc

        logger.debug("Cycle complete | devices=%d | records=%d", len(devices), len(records))
        return len(records)


class PollScheduler:
    """Runs ``cycle`` every ``interval`` seconds until shutdown or failure."""

    def __init__(
        self,
        cycle: Callable[[], object],
        interval: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._cycle = cycle
        self._interval = interval
        self._clock = clock
        self._shutdown = threading.Event()
        self._state = SchedulerState.IDLE
        self.cycles_completed = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def interval(self) -> float:
        return self._interval

    def request_shutdown(self) -> None:
        """Programmatic stop for embedding and tests.

        Lets the current cycle finish and ends an idle wait immediately.
        The CLI stops through :meth:`handle_signal` instead.
        """
        self._shutdown.set()

    def handle_signal(self, signum: int, frame: object) -> None:
        """Signal handler: shutdown wins over an idle wait or in-flight cycle.

        Raises instead of setting the event so that no lock is taken from
        inside the handler.
        """
        if self._state is not SchedulerState.TERMINATED:
            raise ShutdownRequested(signum)

    def install_signal_handlers(self) -> None:
        signals = [signal.SIGINT, signal.SIGTERM]
        # Windows console break
        if hasattr(signal, "SIGBREAK"):
            signals.append(signal.SIGBREAK)
        for signum in signals:
            signal.signal(signum, self.handle_signal)

    def run(self) -> None:
        """Loop until shutdown.  Any cycle error terminates and propagates."""
        if self._state is SchedulerState.TERMINATED:
            raise RuntimeError("scheduler has already terminated")

        try:
            while not self._shutdown.is_set():
                tick_start = self._clock()

                self._state = SchedulerState.RUNNING
                try:
                    self._cycle()
                except Exception:
                    self._state = SchedulerState.TERMINATED
                    raise
                self._state = SchedulerState.IDLE
                self.cycles_completed += 1

                elapsed = self._clock() - tick_start
                self._shutdown.wait(max(0.0, self._interval - elapsed))
        except ShutdownRequested as exc:
            signum = exc.args[0] if exc.args else None
            name = signal.Signals(signum).name if signum is not None else "unknown"
            logger.info("Shutdown requested (%s) in state %s", name, self._state)
        finally:
            self._state = SchedulerState.TERMINATED
