"""Tests for the web API.

The web API serves parsed maps over HTTP.  Tests use
``pytest.importorskip`` so they are skipped gracefully when Flask is not
installed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

flask = pytest.importorskip("flask")

from proc_maps.env import MOUNT_VAR, Environment  # noqa: E402
from proc_maps.web.app import create_app  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_NOT_FOUND = 404
TEST_PID = 77

MAPS_TEXT = (
    "00400000-0040d000 r-xp 00000000 fd:01 85462701   /tmp/Game.exe\n"
    "7ffd1e8f0000-7ffd1e911000 rw-p 00000000 00:00 0  [stack]\n"
)


def _create_client(mount: Path) -> Any:
    """Create a test client serving a fake procfs at *mount*."""
    proc_dir = mount / str(TEST_PID)
    proc_dir.mkdir(parents=True, exist_ok=True)
    (proc_dir / "maps").write_text(MAPS_TEXT, encoding="utf-8")
    app = create_app(Environment({MOUNT_VAR: str(mount)}))
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self, tmp_path: Path) -> None:
        """create_app should return a Flask application."""
        app = create_app(Environment({MOUNT_VAR: str(tmp_path)}))
        assert isinstance(app, flask.Flask)

    def test_create_app_defaults_to_process_env(self) -> None:
        """create_app works without an explicit environment."""
        assert isinstance(create_app(), flask.Flask)


class TestMapsEndpoints:
    """Verify the per-pid endpoints."""

    def test_regions_as_json(self, tmp_path: Path) -> None:
        """GET /api/maps/<pid> returns parsed regions."""
        client = _create_client(tmp_path)
        response = client.get(f"/api/maps/{TEST_PID}")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["pid"] == TEST_PID
        assert [r["pathname"] for r in data["regions"]] == ["/tmp/Game.exe", "[stack]"]
        assert data["regions"][1]["address_start"] == 0x7FFD1E8F0000

    def test_missing_pid_is_not_found(self, tmp_path: Path) -> None:
        """An unknown pid returns 404 with an error message."""
        client = _create_client(tmp_path)
        response = client.get("/api/maps/1")
        assert response.status_code == HTTP_NOT_FOUND
        assert "Open failed" in response.get_json()["error"]

    def test_text_endpoint(self, tmp_path: Path) -> None:
        """GET /maps/<pid> returns canonical text."""
        client = _create_client(tmp_path)
        response = client.get(f"/maps/{TEST_PID}")
        assert response.status_code == HTTP_OK
        assert "text/plain" in response.content_type
        assert response.get_data(as_text=True).startswith("400000-40d000 r-xp ")

    def test_text_endpoint_missing_pid(self, tmp_path: Path) -> None:
        """An unknown pid returns 404 as text."""
        client = _create_client(tmp_path)
        assert client.get("/maps/1").status_code == HTTP_NOT_FOUND

    def test_reads_are_logged(self, tmp_path: Path) -> None:
        """GET /api/log lists the files the app has read."""
        client = _create_client(tmp_path)
        client.get(f"/api/maps/{TEST_PID}")
        entries = client.get("/api/log?min_level=info").get_json()["entries"]
        assert len(entries) == 1
        assert "read 2 regions" in entries[0]

    def test_log_includes_debug_by_default(self, tmp_path: Path) -> None:
        """Without a level the open events are listed too."""
        client = _create_client(tmp_path)
        client.get(f"/api/maps/{TEST_PID}")
        entries = client.get("/api/log").get_json()["entries"]
        assert [e.split("]")[0] for e in entries] == ["[DEBUG", "[INFO"]

    def test_log_filters_errors(self, tmp_path: Path) -> None:
        """min_level=error lists only failed opens."""
        client = _create_client(tmp_path)
        client.get(f"/api/maps/{TEST_PID}")
        client.get("/api/maps/1")
        entries = client.get("/api/log?min_level=error").get_json()["entries"]
        assert len(entries) == 1
        assert entries[0].startswith("[ERROR] read_maps: open failed")

    def test_log_unknown_level(self, tmp_path: Path) -> None:
        """An unknown level name is a bad request."""
        client = _create_client(tmp_path)
        assert client.get("/api/log?min_level=loud").status_code == HTTP_BAD_REQUEST


class TestParseAndFormat:
    """Verify the stateless codec endpoints."""

    def test_parse_text(self, tmp_path: Path) -> None:
        """POST /api/parse returns regions for matching lines."""
        client = _create_client(tmp_path)
        response = client.post("/api/parse", json={"text": MAPS_TEXT + "junk\n"})
        assert response.status_code == HTTP_OK
        assert len(response.get_json()["regions"]) == 2

    def test_parse_missing_text(self, tmp_path: Path) -> None:
        """POST /api/parse without text is a bad request."""
        client = _create_client(tmp_path)
        response = client.post("/api/parse", json={})
        assert response.status_code == HTTP_BAD_REQUEST

    def test_format_round_trip(self, tmp_path: Path) -> None:
        """Regions from /api/parse format back into maps text."""
        client = _create_client(tmp_path)
        regions = client.post("/api/parse", json={"text": MAPS_TEXT}).get_json()["regions"]
        response = client.post("/api/format", json={"regions": regions})
        assert response.status_code == HTTP_OK
        text = response.get_json()["text"]
        assert text.count("\n") == 2
        assert text.splitlines()[1].endswith(" [stack]")

    def test_format_missing_regions(self, tmp_path: Path) -> None:
        """POST /api/format without regions is a bad request."""
        client = _create_client(tmp_path)
        assert client.post("/api/format", json={"text": "x"}).status_code == HTTP_BAD_REQUEST

    def test_format_bad_region(self, tmp_path: Path) -> None:
        """A region missing fields is a bad request."""
        client = _create_client(tmp_path)
        response = client.post("/api/format", json={"regions": [{"address_start": 1}]})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "Bad region" in response.get_json()["error"]

    def test_format_rejects_string_flag(self, tmp_path: Path) -> None:
        """A flag sent as the string "false" is a bad request, not a readable region."""
        client = _create_client(tmp_path)
        regions = client.post("/api/parse", json={"text": MAPS_TEXT}).get_json()["regions"]
        regions[0]["read"] = "false"
        response = client.post("/api/format", json={"regions": regions})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "read" in response.get_json()["error"]

    def test_parse_keeps_form_feed_in_pathname(self, tmp_path: Path) -> None:
        """Only newlines end a line; other separators stay in the pathname."""
        client = _create_client(tmp_path)
        text = "1000-2000 r--p 00000000 00:00 0 /tmp/a\x0cb c\n"
        regions = client.post("/api/parse", json={"text": text}).get_json()["regions"]
        assert [r["pathname"] for r in regions] == ["/tmp/a\x0cb c"]

    def test_parse_accepts_crlf(self, tmp_path: Path) -> None:
        """Windows line endings are handled like a text-mode file."""
        client = _create_client(tmp_path)
        text = MAPS_TEXT.replace("\n", "\r\n")
        regions = client.post("/api/parse", json={"text": text}).get_json()["regions"]
        assert regions[0]["pathname"] == "/tmp/Game.exe"
