"""Single-pass log readers.

Every call scans the file from byte 0. The caller keeps the line cursor
(``from_line``); nothing is retained between calls, so overlapping calls
against the same file are independent and need no locking.
"""

import logging
from typing import Generator, Iterable

from gamelog.markers import LOGIN_MARKER, contains_event_marker
from gamelog.models import LogMetadata, LogUpdate
from gamelog.patterns import PatternCatalogue

logger = logging.getLogger(__name__)

NAME_PREFIX = "name "
NAME_DELIMITER = " - "

# Thresholds for the marker/identity coverage warnings
NO_MARKER_WARN_LINES = 1000
NO_PLAYER_WARN_LINES = 100


class LogReadError(OSError):
    """Raised when a log file cannot be opened or decoded."""


def iter_lines(path: str) -> Generator[tuple[int, str], None, None]:
    """Yield (index, line) for every line, index zero-based.

    Lines are split on ``\\n`` only; the newline and a preceding ``\\r`` are
    dropped. Decoding is strict UTF-8.

    Raises:
        LogReadError: If the file cannot be opened or a line cannot be read.
    """
    try:
        f = open(path, "r", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise LogReadError(f"Failed to open file: {exc}") from exc

    with f:
        index = 0
        while True:
            try:
                line = f.readline()
            except (OSError, UnicodeDecodeError) as exc:
                raise LogReadError(f"Failed to read line: {exc}") from exc
            if not line:
                return
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield index, line
            index += 1


def parse_player_name(line: str) -> str | None:
    """Return the character name from a login line, or None.

    The name runs from the first ``"name "`` to the next ``" - "``, so
    hyphenated names survive.
    """
    if LOGIN_MARKER not in line:
        return None
    start = line.find(NAME_PREFIX)
    if start == -1:
        return None
    name_start = start + len(NAME_PREFIX)
    end = line.find(NAME_DELIMITER, name_start)
    if end == -1:
        return None
    return line[name_start:end]


def extract_player_name_from_lines(lines: Iterable[str]) -> str | None:
    """Most recent player name found in a batch of lines."""
    for line in reversed(list(lines)):
        name = parse_player_name(line)
        if name is not None:
            return name
    return None


def read_log_update(
    path: str,
    from_line: int = 0,
    extract_player_name: bool = True,
    extract_patterns: bool = True,
) -> LogUpdate:
    """Read the whole file once and return what is new since ``from_line``.

    - ``line_count`` is the total for the file, not just the new part.
    - ``player_name`` comes from the last login line anywhere in the file.
    - ``new_lines`` holds lines at/after ``from_line`` that carry an event marker.
    - ``patterns`` holds one pattern per unique signature at/after ``from_line``.

    Raises:
        LogReadError: Nothing partial is returned on failure.
    """
    line_count = 0
    player_name = None
    new_lines: list[str] = []
    catalogue = PatternCatalogue()
    lines_scanned = 0

    for index, line in iter_lines(path):
        if extract_player_name:
            name = parse_player_name(line)
            if name is not None:
                player_name = name

        if index >= from_line:
            lines_scanned += 1

            if extract_patterns:
                catalogue.add_line(line)

            if contains_event_marker(line):
                new_lines.append(line)

        line_count = index + 1

    if lines_scanned:
        filtered_pct = (lines_scanned - len(new_lines)) * 100 // lines_scanned
        logger.debug(
            "read_log_update: scanned %d lines, %d matched markers (%d%% filtered out), %d unique patterns",
            lines_scanned, len(new_lines), filtered_pct, len(catalogue),
        )

    if lines_scanned > NO_MARKER_WARN_LINES and not new_lines:
        logger.warning(
            "No event markers matched in %d lines; the marker catalogue may be out of date",
            lines_scanned,
        )

    if extract_player_name and player_name is None and line_count > NO_PLAYER_WARN_LINES:
        logger.warning(
            "Could not extract player name from %d lines; check the %s line format",
            line_count, LOGIN_MARKER,
        )

    return LogUpdate(
        line_count=line_count,
        player_name=player_name,
        new_lines=new_lines,
        patterns=catalogue.patterns,
    )


def get_log_metadata(path: str) -> LogMetadata:
    """Line count and most recent player name, without filtering or patterns."""
    line_count = 0
    player_name = None

    for index, line in iter_lines(path):
        line_count = index + 1
        name = parse_player_name(line)
        if name is not None:
            player_name = name

    return LogMetadata(line_count=line_count, player_name=player_name)


def read_log_lines_from(path: str, from_line: int) -> list[str]:
    """Every non-blank line at/after ``from_line``, unfiltered by markers."""
    return [
        line for index, line in iter_lines(path)
        if index >= from_line and line.strip()
    ]


def get_line_count(path: str) -> int:
    count = 0
    for _ in iter_lines(path):
        count += 1
    return count
