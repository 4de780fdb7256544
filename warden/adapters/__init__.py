"""Reference adapters for the core ports."""

from warden.adapters.directory import InMemoryEntityDirectory
from warden.adapters.transport import DeliveredMessage, InMemoryTransport, RichConsoleTransport

__all__ = [
    "DeliveredMessage",
    "InMemoryEntityDirectory",
    "InMemoryTransport",
    "RichConsoleTransport",
]
