"""Message sinks: a rich console for the interactive runtime, and a recorder."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from warden.core.models import ConsoleSender, Sender


@dataclass(frozen=True, slots=True)
class DeliveredMessage:
    """One line handed to the transport."""

    recipient: Sender
    text: str
    error: bool = False


class RichConsoleTransport:
    """Prints every delivery; entity deliveries are prefixed with the recipient."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def send(self, recipient: Sender, text: str, *, error: bool = False) -> None:
        body = escape(text)
        if error:
            body = f"[red]{body}[/red]"
        if isinstance(recipient, ConsoleSender):
            self._console.print(body)
        else:
            self._console.print(f"[dim]→ {escape(recipient.display_name)}:[/dim] {body}")


@dataclass
class InMemoryTransport:
    """Records deliveries for inspection."""

    delivered: list[DeliveredMessage] = field(default_factory=list)

    def send(self, recipient: Sender, text: str, *, error: bool = False) -> None:
        self.delivered.append(DeliveredMessage(recipient=recipient, text=text, error=error))

    def to(self, recipient: Sender) -> list[str]:
        return [m.text for m in self.delivered if m.recipient == recipient]

    def clear(self) -> None:
        self.delivered.clear()
