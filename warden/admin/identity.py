"""Identity normalization for administrator matching."""

from __future__ import annotations


def normalize_identity_token(value: str) -> str:
    """Normalize one identity token (id or display name) for matching."""
    token = value.strip()
    if not token:
        return ""
    if token.startswith("@"):
        token = token[1:]
    return token.strip().casefold()


def same_identity(left: str, right: str) -> bool:
    """Compare two identity tokens; blanks never match."""
    a = normalize_identity_token(left)
    return bool(a) and a == normalize_identity_token(right)
