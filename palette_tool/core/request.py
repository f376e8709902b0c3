"""Build the generation request sent to the text model.

Locked colours are written into the prompt as explicit per-slot
constraints. The model may ignore them; apply_locks() enforces them
afterwards regardless.
"""

from typing import Any

from palette_tool.core.errors import InvalidInput
from palette_tool.core.types import PALETTE_SIZE, GenerationRequest, LockedColor

SYSTEM_PROMPT = 'You are a senior brand designer. Output only valid JSON. No markdown.'

DEFAULT_INDUSTRY = 'General web design'

TEMPERATURE = 0.7

PROMPT_TEMPLATE = """Generate a web design color palette.

Return ONLY valid JSON in this format:
{{
  "palette_name": string,
  "description": string,
  "mode": string,
  "colors": [
    {{ "name": string, "hex": string }}
  ]
}}

Requirements:
- Exactly {size} colors
- Valid uppercase hex codes (#RRGGBB)
- Balanced UI palette
- Mode: {mode}
- Style: {style}
- Industry context: {industry}
"""

LOCKS_TEMPLATE = """
Locked colors (keep these exact hex values in these exact positions):
{lines}
Fill the remaining positions with colors that work alongside the locked ones.
"""


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def resolve_mode(value: Any) -> str:
    """'dark' only for the exact literal 'dark'; anything else is 'light'."""
    return 'dark' if value == 'dark' else 'light'


def _lock_lines(locks: list[LockedColor]) -> str:
    lines = []
    for lock in locks:
        line = f'- Color {lock.index + 1} (index {lock.index}) must be exactly {lock.hex}'
        if lock.name:
            line += f' named "{lock.name}"'
        lines.append(line)
    return '\n'.join(lines)


def build_prompt(style: str, industry: str, mode: str, locks: list[LockedColor]) -> str:
    prompt = PROMPT_TEMPLATE.format(
        size=PALETTE_SIZE,
        mode=mode,
        style=style or 'Any',
        industry=industry or DEFAULT_INDUSTRY,
    )
    if locks:
        prompt += LOCKS_TEMPLATE.format(lines=_lock_lines(locks))
    return prompt


def build_request(style: Any, industry: Any, mode: Any, locks: list[LockedColor] | None = None) -> GenerationRequest:
    """Validate caller input and build the request.

    Raises InvalidInput when style and industry are both blank.
    """
    style_text = _text(style)
    industry_text = _text(industry)
    if not style_text and not industry_text:
        raise InvalidInput('Enter a style or an industry')

    resolved_mode = resolve_mode(mode)
    lock_list = list(locks or [])
    return GenerationRequest(
        system_prompt=SYSTEM_PROMPT,
        prompt=build_prompt(style_text, industry_text, resolved_mode, lock_list),
        mode=resolved_mode,
        style=style_text,
        industry=industry_text,
        locks=lock_list,
        temperature=TEMPERATURE,
        json_output=True,
    )
