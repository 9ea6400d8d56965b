"""Runtime services shared by the engine (telemetry)."""

from . import telemetry

__all__ = ["telemetry"]
