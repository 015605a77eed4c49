"""Tests for gamelog/api.py"""

from conftest import DEATH, EQUIP, LOGIN_ALICE


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_json()["status"] == "healthy"


class TestReadUpdate:
    def test_wire_shape(self, client, game_log):
        resp = client.post("/api/read_update", json={
            "path": game_log, "fromLine": 0,
            "extractPlayerName": True, "extractPatterns": True,
        })
        assert resp.status_code == 200
        data = resp.get_json()
        assert set(data) == {"lineCount", "playerName", "newLines", "patterns"}
        assert data["lineCount"] == 5
        assert data["playerName"] == "Alice"
        assert data["newLines"] == [LOGIN_ALICE, EQUIP, DEATH]
        assert set(data["patterns"][0]) == {
            "eventName", "severity", "teams", "subsystems", "signature", "exampleLine",
        }

    def test_from_line(self, client, game_log):
        data = client.post("/api/read_update", json={"path": game_log, "fromLine": 3}).get_json()
        assert data["lineCount"] == 5
        assert data["newLines"] == [DEATH]
        assert data["playerName"] == "Alice"

    def test_flags_off(self, client, game_log):
        data = client.post("/api/read_update", json={
            "path": game_log, "extractPlayerName": False, "extractPatterns": False,
        }).get_json()
        assert data["playerName"] is None
        assert data["patterns"] == []

    def test_missing_file_is_server_error(self, client, tmp_path):
        resp = client.post("/api/read_update", json={"path": str(tmp_path / "nope.log")})
        assert resp.status_code == 500
        assert "Failed to open file" in resp.get_json()["error"]

    def test_missing_path(self, client):
        resp = client.post("/api/read_update", json={"fromLine": 0})
        assert resp.status_code == 400

    def test_negative_from_line(self, client, game_log):
        resp = client.post("/api/read_update", json={"path": game_log, "fromLine": -1})
        assert resp.status_code == 400

    def test_boolean_from_line_rejected(self, client, game_log):
        resp = client.post("/api/read_update", json={"path": game_log, "fromLine": True})
        assert resp.status_code == 400

    def test_non_boolean_flag_rejected(self, client, game_log):
        resp = client.post("/api/read_update", json={"path": game_log, "extractPatterns": "yes"})
        assert resp.status_code == 400

    def test_non_json_body(self, client):
        resp = client.post("/api/read_update", data="not json", content_type="text/plain")
        assert resp.status_code == 400


class TestOtherOperations:
    def test_get_metadata(self, client, game_log):
        resp = client.post("/api/get_metadata", json={"path": game_log})
        assert resp.status_code == 200
        assert resp.get_json() == {"lineCount": 5, "playerName": "Alice"}

    def test_get_line_count(self, client, game_log):
        resp = client.post("/api/get_line_count", json={"path": game_log})
        assert resp.status_code == 200
        assert resp.get_json() == 5

    def test_read_suffix(self, client, write_log):
        path = write_log(["a", "", "b", "c"])
        resp = client.post("/api/read_suffix", json={"path": path, "fromLine": 1})
        assert resp.status_code == 200
        assert resp.get_json() == ["b", "c"]

    def test_metadata_missing_file(self, client, tmp_path):
        resp = client.post("/api/get_metadata", json={"path": str(tmp_path / "nope.log")})
        assert resp.status_code == 500
