"""Tag extraction — pulls bracketed/angle-bracketed tokens out of one log line.

A Game.log line looks like:
    <2025-05-14T10:23:45.123Z> [Notice] <EquipItem> Equipping item ... [Team_ActorTech][Inventory]

Only lines that start with the ``<...Z>`` timestamp are considered.
"""

import re

from gamelog.models import ExtractedTags

# ---------------------------------------------------------------------------
# Compiled regex patterns
# ---------------------------------------------------------------------------

TIMESTAMP_RE = re.compile(r"^<\d{4}-\d{2}-\d{2}T[\d:.]+Z>\s*")
SEVERITY_RE = re.compile(r"\[(Notice|Error|Trace|Warning)\]")
EVENT_NAME_RE = re.compile(r"<([A-Za-z_:][A-Za-z0-9_:]*(?:::[A-Za-z0-9_<>]+)*)>")
TEAM_TAG_RE = re.compile(r"\[Team_([A-Za-z]+)\]")
SUBSYSTEM_TAG_RE = re.compile(r"\[([A-Za-z][A-Za-z0-9_]*)\]")

SEVERITY_TAGS = frozenset({"Notice", "Error", "Trace", "Warning"})


def has_timestamp(line: str) -> bool:
    return line.startswith("<") and TIMESTAMP_RE.match(line) is not None


def _event_name(content: str) -> str | None:
    m = EVENT_NAME_RE.search(content)
    if not m:
        return None
    name = m.group(1)
    # an embedded date like <2025-...> is not an event name
    if name.startswith("20"):
        return None
    return name


def extract_tags(line: str) -> ExtractedTags | None:
    """Extract severity, event name, team and subsystem tags from a line.

    Returns None when the line has no leading timestamp. Missing elements come
    back as None or empty tuples.
    """
    if not has_timestamp(line):
        return None

    content = TIMESTAMP_RE.sub("", line, count=1)

    m = SEVERITY_RE.search(content)
    severity = m.group(1) if m else None

    teams = {f"Team_{name}" for name in TEAM_TAG_RE.findall(content)}

    subsystems = {
        tag for tag in SUBSYSTEM_TAG_RE.findall(content)
        if tag not in SEVERITY_TAGS and not tag.startswith("Team_")
    }

    return ExtractedTags(
        event_name=_event_name(content),
        severity=severity,
        teams=tuple(sorted(teams)),
        subsystems=tuple(sorted(subsystems)),
    )
