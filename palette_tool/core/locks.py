"""Locked colour slots: building a lock set from raw caller input, and applying it.

build_locks() is lenient: a raw record with a bad index, a bad hex or the
wrong shape is dropped, never reported. Duplicate indices collapse to one
lock per slot, the last valid occurrence winning.

apply_locks() is the final, unconditional step of every generation. Whatever
the model returned, a locked slot ends up with exactly the locked hex.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from palette_tool.core.hexcodec import INVALID, normalize_hex
from palette_tool.core.types import PALETTE_SIZE, Color, LockedColor, Palette, fallback_name


def _coerce_index(value: Any) -> int | None:
    """Coerce to a finite integer, or None.

    Accepts ints, integral floats and numeric strings ('2', ' 3 ', '2.0').
    Bools are rejected even though Python treats them as ints.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return _coerce_index(number)
    return None


def _coerce_name(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def build_lock(raw: Any) -> LockedColor | None:
    """Validate one raw lock record. Returns None if it must be dropped."""
    if not isinstance(raw, Mapping):
        return None
    index = _coerce_index(raw.get('index'))
    if index is None or not 0 <= index < PALETTE_SIZE:
        return None
    hex_value = normalize_hex(raw.get('hex'))
    if hex_value == INVALID:
        return None
    return LockedColor(index=index, hex=hex_value, name=_coerce_name(raw.get('name')))


def build_locks(raw_locks: Iterable[Any] | None) -> list[LockedColor]:
    """Build the lock set from untyped caller records.

    One lock per index (last valid occurrence wins), sorted by index.
    """
    if raw_locks is None or isinstance(raw_locks, (str, bytes, Mapping)):
        return []
    by_index: dict[int, LockedColor] = {}
    for raw in raw_locks:
        lock = build_lock(raw)
        if lock is not None:
            by_index[lock.index] = lock
    return [by_index[i] for i in sorted(by_index)]


def parse_lock_arg(text: str) -> dict[str, str]:
    """Parse the CLI shorthand INDEX:HEX[:NAME] into a raw lock record.

    The name may itself contain colons. Validation is left to build_lock().
    """
    parts = text.split(':', 2)
    raw = {'index': parts[0]}
    if len(parts) > 1:
        raw['hex'] = parts[1]
    if len(parts) > 2:
        raw['name'] = parts[2]
    return raw


def apply_locks(palette: Palette, locks: Iterable[LockedColor]) -> Palette:
    """Return a new palette with every locked slot overwritten.

    Locks apply in order, so a later lock on the same index wins. The name
    comes from the lock if it has one, else the slot keeps its current name.
    """
    colors = list(palette.colors)
    for lock in locks:
        if not 0 <= lock.index < len(colors):
            continue
        existing = colors[lock.index].name
        name = lock.name or existing or fallback_name(lock.index)
        colors[lock.index] = Color(name=name, hex=lock.hex)
    return replace(palette, colors=colors)
