"""Output formats for a generated palette: text card, JSON, CSS variables, hex list."""

import json
import re

from palette_tool.core.hexcodec import is_light_hex
from palette_tool.core.types import LockedColor, Palette

_WHITESPACE = re.compile(r'\s+')


def css_var_name(name: str) -> str:
    """'Deep Ocean Blue' -> 'deep-ocean-blue'."""
    return _WHITESPACE.sub('-', name.strip().lower())


def format_text(palette: Palette, locks: list[LockedColor] | None = None) -> str:
    """Format palette as a human-readable card."""
    locked = {lock.index for lock in locks or []}
    lines = [f'palette-tool: {palette.palette_name} ({palette.mode})']
    if palette.description:
        lines.append(f'  {palette.description}')
    lines.append('')

    for i, color in enumerate(palette.colors):
        ink = 'dark text' if is_light_hex(color.hex) else 'light text'
        mark = '  (locked)' if i in locked else ''
        lines.append(f'── {i + 1}  {color.hex}  {color.name:<24} {ink}{mark}')

    if locked:
        lines.append('')
        lines.append(f'Locks: {len(locked)}/{len(palette.colors)}')
    return '\n'.join(lines)


def format_json(palette: Palette) -> str:
    """Format palette as JSON, in the shape callers receive."""
    return json.dumps(palette.to_dict(), indent=2)


def format_css(palette: Palette) -> str:
    """CSS custom properties, one per colour."""
    return '\n'.join(f'--{css_var_name(c.name)}: {c.hex};' for c in palette.colors)


def format_hex_list(palette: Palette) -> str:
    return ', '.join(c.hex for c in palette.colors)


FORMATTERS = {
    'json': format_json,
    'css': format_css,
    'hex': format_hex_list,
}
