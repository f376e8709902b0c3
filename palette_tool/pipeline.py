"""End-to-end palette generation.

    caller input -> build_locks -> build_request -> complete() -> parse_response
                 -> sanitize -> apply_locks -> Palette

`complete` is any callable taking a GenerationRequest and returning the
model's raw text (see palette_tool.llm.completer). Each call is independent:
locks must be passed in again on every generation to be kept.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from palette_tool.core.errors import PaletteError, UpstreamUnavailable
from palette_tool.core.locks import apply_locks, build_locks
from palette_tool.core.request import build_request
from palette_tool.core.sanitize import parse_response, sanitize
from palette_tool.core.types import GenerationRequest, Palette

Completer = Callable[[GenerationRequest], str]


def generate_palette(
    style: Any,
    industry: Any,
    mode: Any = 'light',
    locked_colors: Iterable[Any] | None = None,
    *,
    complete: Completer,
) -> Palette:
    """Generate one palette.

    Raises InvalidInput before calling the model if style and industry are
    both blank, UpstreamUnavailable if the call fails, UpstreamUnparseable
    if the model output is not JSON.
    """
    locks = build_locks(locked_colors)
    request = build_request(style, industry, mode, locks)

    try:
        raw_text = complete(request)
    except PaletteError:
        raise
    except Exception as e:
        raise UpstreamUnavailable('Failed to generate palette') from e

    palette = sanitize(parse_response(raw_text), request.mode)
    return apply_locks(palette, locks)


def generate_from_payload(payload: Any, *, complete: Completer) -> Palette:
    """Generate from a caller request body: {style, industry, mode, lockedColors}."""
    body = payload if isinstance(payload, Mapping) else {}
    locked = body.get('lockedColors')
    if not isinstance(locked, (list, tuple)):
        locked = None
    return generate_palette(
        body.get('style'),
        body.get('industry'),
        body.get('mode'),
        locked,
        complete=complete,
    )
