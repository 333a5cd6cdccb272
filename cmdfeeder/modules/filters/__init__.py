"""
Filters Module - Black Box Interface

Purpose: Transform commands as the feeder releases them
Interface: strip_comments(), trim_whitespace(), chain(), build_filter()
Hidden: Comment syntax

Every filter has the (command, context) -> command signature expected by
Feeder(data_filter=...). A falsy result tells the feeder to skip the line.
"""

from .gcode import build_filter, chain, strip_comments, trim_whitespace

__all__ = ["build_filter", "chain", "strip_comments", "trim_whitespace"]
