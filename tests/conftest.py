"""Shared pytest fixtures for the gamelog test suite."""

import pytest

from gamelog.api import create_app
from gamelog.config import Config

LOGIN_ALICE = (
    "<2025-05-14T10:00:01.000Z> [Notice] <AccountLoginCharacterStatus_Character> Character: "
    "createdAt 1700000000000 - accountId 1234 - name Alice - state STATE_CURRENT "
    "[Team_GameServices][Login]"
)
LOGIN_BOB = LOGIN_ALICE.replace("name Alice", "name Bob").replace("10:00:01", "11:00:01")
EQUIP = (
    "<2025-05-14T10:00:02.000Z> [Notice] <EquipItem> Equipping item 'rifle' "
    "[Team_ActorTech][Inventory]"
)
DEATH = (
    "<2025-05-14T10:00:03.000Z> [Notice] <Actor Death> CActor::Kill: 'Bob' [1] killed by 'Alice' "
    "[Team_ActorTech][Combat]"
)
NOISE = (
    "<2025-05-14T10:00:04.000Z> [Trace] <ContextEstablisherTaskFinished> "
    "establisher=\"CReplicationModel\" [Team_Network][Replication]"
)
PLAIN = "plain unrelated line"


@pytest.fixture()
def write_log(tmp_path):
    """Return a helper that writes lines to a log file and returns its path."""

    def _write(lines, name="Game.log", newline="\n", trailing=True):
        path = tmp_path / name
        text = newline.join(lines)
        if trailing and lines:
            text += newline
        path.write_bytes(text.encode("utf-8"))
        return str(path)

    return _write


@pytest.fixture()
def game_log(write_log):
    """A small session: login, equip, noise, death, plain text."""
    return write_log([LOGIN_ALICE, EQUIP, NOISE, DEATH, PLAIN])


@pytest.fixture()
def app():
    """Create a Flask test app."""
    application = create_app(Config())
    application.config["TESTING"] = True
    return application


@pytest.fixture()
def client(app):
    """Create a Flask test client."""
    return app.test_client()
