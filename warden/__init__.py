"""warden - command verification and dispatch for text-command servers."""

__version__ = "0.4.0"
__logo__ = "⚔"
