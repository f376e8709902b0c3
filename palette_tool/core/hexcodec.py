"""Hex colour parsing and canonicalization.

Canonical form is '#' + 6 uppercase hex digits. Anything else (3-digit
shorthand, alpha, named colours, CSS functions) is invalid. Invalid input
returns the INVALID sentinel rather than raising, so callers can apply
their fallback inline.
"""

import re
from typing import Any

INVALID = ''

_CANONICAL = re.compile(r'#[0-9A-F]{6}')


def normalize_hex(value: Any) -> str:
    """Return canonical '#RRGGBB' or INVALID.

    None is treated as empty; other non-text values are coerced with str().
    """
    if value is None:
        return INVALID
    try:
        h = str(value).strip().upper()
    except ValueError:
        # int too large for str() conversion
        return INVALID
    if not h:
        return INVALID
    if not h.startswith('#'):
        h = f'#{h}'
    if not _CANONICAL.fullmatch(h):
        return INVALID
    return h


def is_valid_hex(value: str) -> bool:
    """True if value is already in canonical form."""
    return isinstance(value, str) and bool(_CANONICAL.fullmatch(value))


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Convert canonical hex to an (r, g, b) tuple. Invalid input gives black."""
    h = normalize_hex(hex_str)
    if h == INVALID:
        return (0, 0, 0)
    return (int(h[1:3], 16), int(h[3:5], 16), int(h[5:7], 16))


def brightness(hex_str: str) -> float:
    """Perceived brightness 0..255 (ITU BT.601 weights)."""
    r, g, b = hex_to_rgb(hex_str)
    return (r * 299 + g * 587 + b * 114) / 1000


def is_light_hex(hex_str: str) -> bool:
    """True when dark text reads better on this colour."""
    if normalize_hex(hex_str) == INVALID:
        return False
    return brightness(hex_str) > 180
