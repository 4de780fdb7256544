"""Application wiring."""

from warden.app.bootstrap import WardenRuntime, build_runtime

__all__ = ["WardenRuntime", "build_runtime"]
