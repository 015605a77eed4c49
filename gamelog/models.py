"""Boundary models for the log reader — internal dataclasses + camelCase wire dicts."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractedTags:
    event_name: str | None = None
    severity: str | None = None      # Notice, Error, Trace, Warning
    teams: tuple[str, ...] = ()      # sorted, unique, e.g. "Team_CoreGameplayFeatures"
    subsystems: tuple[str, ...] = () # sorted, unique, severity/team tags excluded


@dataclass(frozen=True)
class RawLogPattern:
    tags: ExtractedTags
    signature: str
    example_line: str

    def to_dict(self) -> dict:
        return {
            "eventName": self.tags.event_name,
            "severity": self.tags.severity,
            "teams": list(self.tags.teams),
            "subsystems": list(self.tags.subsystems),
            "signature": self.signature,
            "exampleLine": self.example_line,
        }


@dataclass(frozen=True)
class LogMetadata:
    line_count: int
    player_name: str | None = None

    def to_dict(self) -> dict:
        return {
            "lineCount": self.line_count,
            "playerName": self.player_name,
        }


@dataclass
class LogUpdate:
    line_count: int
    player_name: str | None = None
    new_lines: list[str] = field(default_factory=list)
    patterns: list[RawLogPattern] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "lineCount": self.line_count,
            "playerName": self.player_name,
            "newLines": list(self.new_lines),
            "patterns": [p.to_dict() for p in self.patterns],
        }
