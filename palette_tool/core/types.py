"""Shared types for palette-tool: Color, Palette, LockedColor, GenerationRequest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PALETTE_SIZE = 5
FALLBACK_HEX = '#F5F5F5'
FALLBACK_PALETTE_NAME = 'Generated Palette'


def fallback_name(index: int) -> str:
    """Positional label for slot `index` (0-based), e.g. 'Color 1'."""
    return f'Color {index + 1}'


@dataclass(frozen=True)
class Color:
    """One palette slot. `hex` is always canonical #RRGGBB once built by the core."""

    name: str
    hex: str

    def to_dict(self) -> dict[str, str]:
        return {'name': self.name, 'hex': self.hex}


@dataclass(frozen=True)
class LockedColor:
    """A caller-pinned slot: the hex at `index` must survive every generation."""

    index: int  # 0..4
    hex: str  # canonical #RRGGBB
    name: str | None = None


@dataclass
class Palette:
    """A generated palette. Always exactly PALETTE_SIZE colours."""

    palette_name: str
    description: str
    mode: str  # 'light' | 'dark'
    colors: list[Color] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'palette_name': self.palette_name,
            'description': self.description,
            'mode': self.mode,
            'colors': [c.to_dict() for c in self.colors],
        }


@dataclass
class GenerationRequest:
    """Everything the text-generation collaborator needs for one call."""

    system_prompt: str
    prompt: str
    mode: str
    style: str = ''
    industry: str = ''
    locks: list[LockedColor] = field(default_factory=list)
    temperature: float = 0.7
    json_output: bool = True  # ask the backend for strict JSON

    def messages(self) -> list[dict[str, str]]:
        """Chat messages in OpenAI-compatible shape."""
        return [
            {'role': 'system', 'content': self.system_prompt},
            {'role': 'user', 'content': self.prompt},
        ]
