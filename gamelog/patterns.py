"""Signature building and per-read pattern cataloguing for schema discovery."""

from typing import Iterable

from gamelog.models import ExtractedTags, RawLogPattern
from gamelog.tags import extract_tags

SIGNATURE_DELIMITER = "|"
PLACEHOLDER = "null"


def generate_signature(
    event_name: str | None,
    severity: str | None,
    teams: Iterable[str],
    subsystems: Iterable[str],
) -> str:
    """Stable dedup key: ``event|severity|teams|subsystems``, tags sorted.

    Absent event name or severity are written as ``null``.
    """
    return SIGNATURE_DELIMITER.join((
        event_name or PLACEHOLDER,
        severity or PLACEHOLDER,
        ",".join(sorted(teams)),
        ",".join(sorted(subsystems)),
    ))


def signature_of(tags: ExtractedTags) -> str:
    return generate_signature(tags.event_name, tags.severity, tags.teams, tags.subsystems)


def extract_log_pattern(line: str) -> RawLogPattern | None:
    """Build a RawLogPattern for a timestamped line, or None."""
    tags = extract_tags(line)
    if tags is None:
        return None
    return RawLogPattern(tags=tags, signature=signature_of(tags), example_line=line)


class PatternCatalogue:
    """Unique patterns seen during one read, in first-seen order.

    Not shared between reads: each read builds its own catalogue.
    """

    def __init__(self):
        self._seen: set[str] = set()
        self._patterns: list[RawLogPattern] = []

    def add(self, pattern: RawLogPattern) -> bool:
        """Record the pattern if its signature is new. Returns True if added."""
        if pattern.signature in self._seen:
            return False
        self._seen.add(pattern.signature)
        self._patterns.append(pattern)
        return True

    def add_line(self, line: str) -> bool:
        pattern = extract_log_pattern(line)
        if pattern is None:
            return False
        return self.add(pattern)

    @property
    def patterns(self) -> list[RawLogPattern]:
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, signature: str) -> bool:
        return signature in self._seen
