"""Errors that reach the caller.

Only these three conditions surface as errors. Every other irregularity
(missing fields, wrong types, bad hex, stray lock indices) is normalized
by the sanitizer or the lock builder and never raised.
"""

from typing import Any


class PaletteError(Exception):
    """Base class. `kind` is a stable machine-readable tag."""

    kind = 'error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {'error': self.message, 'kind': self.kind}


class InvalidInput(PaletteError):
    """Style and industry were both blank. The model is never called."""

    kind = 'invalid_input'


class UpstreamUnparseable(PaletteError):
    """The model returned text that is not JSON at all. Safe for the caller to retry."""

    kind = 'upstream_unparseable'


class UpstreamUnavailable(PaletteError):
    """The call to the model itself failed."""

    kind = 'upstream_unavailable'
