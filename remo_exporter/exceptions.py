"""Error taxonomy for the exporter.

Every failure inside a poll/encode/write cycle is fatal to the process;
these types only exist so the operator sees which stage failed and why.
"""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for all exporter failures."""


class ConfigError(ExporterError):
    """Missing or inconsistent environment configuration."""


class UpstreamError(ExporterError):
    """Transport failure or non-2xx status from an external service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(UpstreamError):
    """The registry returned a document that does not match the device shape."""


class CycleError(ExporterError):
    """A poll/encode/write cycle failed at a named stage."""

    def __init__(self, stage: str, cause: BaseException) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause


class ShutdownRequested(BaseException):
    """Raised from the signal handler to abandon an in-flight cycle.

    Derives from BaseException so HTTP client code that catches
    ``Exception`` does not swallow it.
    """
