"""Tests for gamelog/formatter.py"""

import json

from conftest import DEATH, EQUIP, LOGIN_ALICE
from gamelog.formatter import (
    COLORS,
    RESET,
    format_json,
    format_line,
    format_update_text,
    get_formatter,
)
from gamelog.models import LogMetadata, LogUpdate
from gamelog.patterns import extract_log_pattern


def _update():
    return LogUpdate(
        line_count=10,
        player_name="Alice",
        new_lines=[LOGIN_ALICE, EQUIP, DEATH],
        patterns=[extract_log_pattern(EQUIP)],
    )


class TestFormatJson:
    def test_model(self):
        assert json.loads(format_json(LogMetadata(3, "Bob"))) == {"lineCount": 3, "playerName": "Bob"}

    def test_update(self):
        data = json.loads(format_json(_update()))
        assert data["lineCount"] == 10
        assert data["patterns"][0]["eventName"] == "EquipItem"

    def test_scalars_and_lists(self):
        assert format_json(3) == "3"
        assert json.loads(format_json(["a", "b"])) == ["a", "b"]


class TestFormatText:
    def test_line_has_category(self):
        assert format_line(DEATH).startswith("[combat    ] ")
        assert format_line("plain").startswith("[-         ] ")

    def test_color(self):
        out = format_line(EQUIP, color=True)
        assert COLORS["inventory"] in out
        assert RESET in out

    def test_update_text(self):
        out = format_update_text(_update())
        assert EQUIP in out
        assert "Total lines: 10" in out
        assert "Player: Alice" in out
        assert "Event lines: 3" in out
        assert "EquipItem|Notice|Team_ActorTech|Inventory" in out

    def test_empty_update_text(self):
        out = format_update_text(LogUpdate(line_count=0))
        assert "Player: unknown" in out
        assert "No patterns." in out


class TestGetFormatter:
    def test_json_default(self):
        assert get_formatter() is format_json

    def test_text(self):
        assert "Total lines: 10" in get_formatter("text")(_update())
