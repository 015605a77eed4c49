"""Output formatters — JSON (wire shape) and text, optionally colorized (ANSI)."""

import json
from typing import Callable

from gamelog.markers import find_marker_category
from gamelog.models import LogUpdate

# ANSI color codes per marker category
COLORS = {
    "connection": "\033[36m",  # cyan
    "inventory": "\033[34m",   # blue
    "vehicle": "\033[35m",     # magenta
    "combat": "\033[31m",      # red
    "mission": "\033[33m",     # yellow
    "economy": "\033[32m",     # green
    "location": "\033[37m",    # white
    "system": "\033[90m",      # grey
}
RESET = "\033[0m"


def _wire(obj):
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, list):
        return [_wire(item) for item in obj]
    return obj


def format_json(obj) -> str:
    """Serialize a model (or list/scalar) using its camelCase wire shape."""
    return json.dumps(_wire(obj))


def format_line(line: str, color: bool = False) -> str:
    category = find_marker_category(line) or "-"
    if color and category in COLORS:
        return f"[{COLORS[category]}{category:10s}{RESET}] {line}"
    return f"[{category:10s}] {line}"


def format_update_text(update: LogUpdate, color: bool = False) -> str:
    """Human-readable update: one line per event, then a pattern summary."""
    lines = [format_line(line, color) for line in update.new_lines]
    if lines:
        lines.append("")

    lines.append(f"Total lines: {update.line_count}")
    lines.append(f"Player: {update.player_name or 'unknown'}")
    lines.append(f"Event lines: {len(update.new_lines)}")

    if update.patterns:
        lines.append(f"Patterns ({len(update.patterns)}):")
        for pattern in update.patterns:
            lines.append(f"  {pattern.signature}")
    else:
        lines.append("No patterns.")

    return "\n".join(lines)


def get_formatter(output_format: str = "json", color: bool = False) -> Callable[[LogUpdate], str]:
    """Factory that returns the right update formatter based on args."""
    if output_format == "text":
        return lambda update: format_update_text(update, color=color)
    return format_json
