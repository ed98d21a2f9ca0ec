"""Runtime services (logging, profiling) shared by the buffer core."""

from . import telemetry

__all__ = ["telemetry"]
