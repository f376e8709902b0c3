"""Turn whatever the model returned into a strict 5-colour palette.

Two steps:

  parse_response()  raw text -> any JSON value. The only failure is text
                    that is not JSON at all (UpstreamUnparseable).
  sanitize()        any value -> Palette. Total: never raises. Missing
                    fields, wrong types, too few or too many colours and
                    bad hex all fall back to fixed defaults.

Fallbacks:
  palette_name  'Generated Palette'
  description   ''
  colour name   'Color N' (1-based position)
  colour hex    #F5F5F5
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from palette_tool.core.errors import UpstreamUnparseable
from palette_tool.core.hexcodec import INVALID, is_valid_hex, normalize_hex
from palette_tool.core.request import resolve_mode
from palette_tool.core.types import (
    FALLBACK_HEX,
    FALLBACK_PALETTE_NAME,
    PALETTE_SIZE,
    Color,
    Palette,
    fallback_name,
)

_FENCE = re.compile(r'^```[a-zA-Z]*\s*(.*?)\s*```$', re.DOTALL)


def parse_response(text: str | None) -> Any:
    """Parse model output into a JSON value.

    Empty output parses as {} so it falls through to the sanitizer's
    defaults. A single surrounding Markdown code fence is tolerated.
    """
    if text is None or not text.strip():
        return {}
    body = text.strip()
    m = _FENCE.match(body)
    if m:
        body = m.group(1)
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise UpstreamUnparseable('Model returned an unreadable palette') from e


def _first_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ''


def _sanitize_color(entry: Any, index: int) -> Color:
    if not isinstance(entry, Mapping):
        return Color(name=fallback_name(index), hex=INVALID)
    raw_name = entry.get('name')
    name = raw_name.strip() if isinstance(raw_name, str) else fallback_name(index)
    return Color(name=name, hex=normalize_hex(entry.get('hex')))


def sanitize(raw: Any, mode: str = 'light') -> Palette:
    """Build a well-formed palette from an untrusted JSON value.

    `mode` is the request's resolved mode; any mode in `raw` is ignored.
    """
    data = raw if isinstance(raw, Mapping) else {}

    palette_name = _first_text(data.get('palette_name')) or FALLBACK_PALETTE_NAME
    description = _first_text(data.get('description'))

    entries = data.get('colors')
    if not isinstance(entries, (list, tuple)):
        entries = []
    colors = [_sanitize_color(entry, i) for i, entry in enumerate(entries[:PALETTE_SIZE])]

    # Pad short palettes
    while len(colors) < PALETTE_SIZE:
        colors.append(Color(name=fallback_name(len(colors)), hex=FALLBACK_HEX))

    # Repair pass: every slot ends with a non-empty name and canonical hex
    repaired = []
    for i, color in enumerate(colors):
        repaired.append(
            Color(
                name=color.name or fallback_name(i),
                hex=color.hex if is_valid_hex(color.hex) else FALLBACK_HEX,
            )
        )

    return Palette(
        palette_name=palette_name,
        description=description,
        mode=resolve_mode(mode),
        colors=repaired,
    )
