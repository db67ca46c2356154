import json
import pytest

from mpd_switcher import create_app
from mpd_switcher.config import ConfigSchema
from mpd_switcher.core.errors import RestartError


def _settings_for(config_dir):
    return ConfigSchema.model_validate(
        {"server": {"log_file": ""}, "mpd": {"config_dir": str(config_dir)}}
    )


def test_get_config_parts(client):
    response = client.get("/api/configparts")
    assert response.status_code == 200
    assert json.loads(response.data) == [
        {"key": "exclusive", "name": "Exclusive (DSD)"},
        {"key": "pipewire", "name": "Pipewire"},
    ]


def test_get_config_parts_missing_dir(tmp_path, restarter):
    app = create_app(_settings_for(tmp_path / "missing"), restarter=restarter)
    response = app.test_client().get("/api/configparts")

    assert response.status_code == 500
    assert response.get_json()["error"].startswith("Failed to discover config parts:")


def test_current_mode_without_mpd_conf(client):
    response = client.get("/api/currentmode")
    assert response.status_code == 200
    assert response.get_json() == {"key": "unknown", "name": "<Unknown>"}


def test_current_mode_marker_not_in_catalog(client, config_dir):
    (config_dir / "mpd.conf").write_text("# CurrentConfig: gone\n")
    response = client.get("/api/currentmode")
    assert response.status_code == 200
    assert response.get_json()["key"] == "unknown"


def test_current_mode_missing_dir_still_ok(tmp_path, restarter):
    app = create_app(_settings_for(tmp_path / "missing"), restarter=restarter)
    response = app.test_client().get("/api/currentmode")
    assert response.status_code == 200
    assert response.get_json() == {"key": "unknown", "name": "<Unknown>"}


def test_switch_and_query(client, restarter):
    response = client.get("/api/switch/exclusive")
    assert response.status_code == 200
    assert response.get_json() == {"message": "MPD successfully switched to Exclusive (DSD) mode."}
    restarter.restart.assert_called_once()

    response = client.get("/api/currentmode")
    assert response.get_json() == {"key": "exclusive", "name": "Exclusive (DSD)"}


def test_switch_unknown_mode(client, config_dir, restarter):
    response = client.get("/api/switch/nope")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid target mode specified: nope"}
    assert not (config_dir / "mpd.conf").exists()
    restarter.restart.assert_not_called()


def test_switch_restart_failure_reports_error_but_keeps_file(client, config_dir, restarter):
    restarter.restart.side_effect = RestartError("command failed: systemctl --user restart mpd.service")

    response = client.get("/api/switch/pipewire")

    assert response.status_code == 500
    assert response.get_json()["error"].startswith("Failed to restart MPD service:")
    assert (config_dir / "mpd.conf").read_text().startswith("# CurrentConfig: pipewire\n")


def test_switch_missing_base_part(client, config_dir):
    (config_dir / "base.mpd.conf.part").unlink()

    response = client.get("/api/switch/pipewire")

    assert response.status_code == 500
    assert "base MPD configuration part" in response.get_json()["error"]


def test_switch_missing_dir(tmp_path, restarter):
    app = create_app(_settings_for(tmp_path / "missing"), restarter=restarter)
    response = app.test_client().get("/api/switch/pipewire")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to discover config parts."}


def test_end_to_end_alpha(tmp_path, restarter):
    (tmp_path / "base.mpd.conf.part").write_text("x\n")
    (tmp_path / "config-a.mpd.conf.part").write_text("# ConfigPartName: Alpha\ny\n")
    client = create_app(_settings_for(tmp_path), restarter=restarter).test_client()

    assert client.get("/api/switch/a").status_code == 200
    assert (tmp_path / "mpd.conf").read_text() == "# CurrentConfig: a\nx\n# ConfigPartName: Alpha\ny\n"
    assert client.get("/api/currentmode").get_json() == {"key": "a", "name": "Alpha"}


def test_unknown_api_endpoint(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_switch_latin1_fragment_returns_json(client, config_dir):
    (config_dir / "config-latin.mpd.conf.part").write_bytes(b"# ConfigPartName: Caf\xe9\ny\n")

    response = client.get("/api/switch/latin")

    assert response.status_code == 200
    assert "message" in response.get_json()
    assert (config_dir / "mpd.conf").read_bytes().endswith(b"# ConfigPartName: Caf\xe9\ny\n")
