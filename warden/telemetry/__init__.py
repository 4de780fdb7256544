"""Telemetry backends."""

from warden.telemetry.inmemory import InMemoryTelemetry

__all__ = ["InMemoryTelemetry"]
