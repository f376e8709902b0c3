"""palette-tool — AI colour palette generation with locked slots."""

__version__ = '0.1.0'
