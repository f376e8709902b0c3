"""palette_tool.core — Foundation layer.

Contains the palette types, hex codec, lock handling, request builder,
response sanitizer, config loading and output formatting.
This module has NO dependencies on palette_tool.llm or palette_tool.pipeline.
Only the standard library is allowed here.
"""
