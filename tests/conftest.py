import pytest
from unittest.mock import MagicMock

from mpd_switcher import create_app
from mpd_switcher.config import ConfigSchema
from mpd_switcher.core.systemd import ServiceRestarter


@pytest.fixture
def config_dir(tmp_path):
    """MPD config directory with a base part and two modes."""
    (tmp_path / "base.mpd.conf.part").write_text('music_directory "~/Music"\n')
    (tmp_path / "config-exclusive.mpd.conf.part").write_text(
        '# ConfigPartName: Exclusive (DSD)\naudio_output {\n  type "alsa"\n}\n'
    )
    (tmp_path / "config-pipewire.mpd.conf.part").write_text(
        'audio_output {\n  type "pipewire"\n}\n'
    )
    return tmp_path


@pytest.fixture
def settings(config_dir):
    return ConfigSchema.model_validate(
        {"server": {"log_file": ""}, "mpd": {"config_dir": str(config_dir)}}
    )


@pytest.fixture
def restarter():
    return MagicMock(spec=ServiceRestarter)


@pytest.fixture
def app(settings, restarter):
    app = create_app(settings, restarter=restarter)
    app.testing = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
