import re
from typing import Any, Callable, Dict, Optional

DataFilter = Callable[[Any, Dict[str, Any]], Any]

# "; to end of line" and "(inline block)" comments
_SEMICOLON_COMMENT = re.compile(r";.*$")
_PAREN_COMMENT = re.compile(r"\([^)]*\)")


def trim_whitespace(command: Any, context: Dict[str, Any]) -> Any:
    """Strip surrounding whitespace from string commands."""
    if not isinstance(command, str):
        return command
    return command.strip()


def strip_comments(command: Any, context: Dict[str, Any]) -> Any:
    """
    Remove G-code comments from a command line.

    Args:
        command: Command line, e.g. "G0 X10 (rapid) ; move"
        context: Context stored with the command (unused)

    Returns:
        The command without comments and surrounding whitespace. Each line of
        a multi-line command is stripped separately and emptied lines are
        dropped. A command that contained only comments becomes "" so the
        feeder skips it.
        Non-string commands are returned unchanged.
    """
    if not isinstance(command, str):
        return command

    lines = []
    for line in command.splitlines():
        line = _SEMICOLON_COMMENT.sub("", _PAREN_COMMENT.sub("", line)).strip()
        if line:
            lines.append(line)
    return "\n".join(lines)


def chain(*filters: DataFilter) -> DataFilter:
    """
    Compose filters left to right.

    The first falsy result is returned immediately, so later filters never
    see a rejected command.
    """

    def chained(command: Any, context: Dict[str, Any]) -> Any:
        for data_filter in filters:
            command = data_filter(command, context)
            if not command:
                return command
        return command

    return chained


def build_filter(strip_comments_enabled: bool) -> Optional[DataFilter]:
    """Return the data filter configured for new feeders, or None for pass-through."""
    if strip_comments_enabled:
        return chain(trim_whitespace, strip_comments)
    return None
