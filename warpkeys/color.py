"""Hex colour parsing."""

from __future__ import annotations


class ColorError(ValueError):
    """Raised when a colour string is not a valid hex colour."""


def hex_to_rgba(text: str) -> tuple[int, int, int, int]:
    """Parse ``#rrggbb`` or ``#rrggbbaa`` (``#`` optional) into an RGBA tuple."""
    digits = text[1:] if text.startswith("#") else text
    if len(digits) not in (6, 8):
        raise ColorError(f"{text!r} is not a 6 or 8 digit hex colour")
    try:
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    except ValueError:
        raise ColorError(f"{text!r} contains non-hex digits") from None
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return r, g, b, a