"""
Service Handlers for the mode switching domain.

Sits between the API routes and the filesystem/systemd helpers in core.
"""

import logging
import os
import stat
import tempfile
from typing import List

from mpd_switcher.config.schemas import MpdConfig
from mpd_switcher.core import modes
from mpd_switcher.core.errors import (
    ConfigWriteError,
    FragmentReadError,
    ModeNotFoundError,
    RestartError,
)
from mpd_switcher.core.modes import ConfigPart
from mpd_switcher.core.systemd import ServiceRestarter

logger = logging.getLogger(__name__)


def _read_bytes(path: str) -> bytes:
    # Fragments are joined as raw bytes, whatever their encoding
    with open(path, "rb") as f:
        return f.read()


def write_atomic(path: str, content: bytes):
    """
    Write content to a temp file next to path, fsync, then rename over path.

    A symlinked path is resolved first so the link itself survives, and an
    existing file keeps its permission bits.
    """
    path = os.path.realpath(path)
    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        mode = 0o644

    dir_name = os.path.dirname(path) or "."
    fd, tmp_path = tempfile.mkstemp(prefix=".mpd.conf.", dir=dir_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class ModeService:
    def __init__(self, mpd_config: MpdConfig, restarter: ServiceRestarter = None):
        self.config = mpd_config
        self.restarter = restarter or ServiceRestarter(mpd_config)

    def list_modes(self) -> List[ConfigPart]:
        return modes.discover_modes(self.config.config_dir)

    def current_mode(self) -> ConfigPart:
        return modes.resolve_current_mode(self.config.config_dir, self.config.mpd_conf_path)

    def switch(self, key: str) -> str:
        """
        Compose mpd.conf for the given mode and restart MPD.

        Not transactional: if the restart fails, mpd.conf has already been
        switched and RestartError propagates to the caller.
        """
        target = modes.find_mode(self.list_modes(), key)
        if target is None:
            raise ModeNotFoundError(key)

        logger.info("Attempting to switch to %s mode...", target.name)

        try:
            base_content = _read_bytes(self.config.base_part_path)
        except OSError as e:
            raise FragmentReadError(f"Failed to read base MPD configuration part: {e}") from e

        try:
            part_content = _read_bytes(target.full_path)
        except OSError as e:
            raise FragmentReadError(
                f"Failed to read target MPD configuration part ({target.full_path}): {e}"
            ) from e

        content = modes.compose_config(target.key, base_content, part_content)

        try:
            write_atomic(self.config.mpd_conf_path, content)
        except OSError as e:
            raise ConfigWriteError(f"Failed to write new MPD configuration: {e}") from e
        logger.info("Successfully wrote new mpd.conf for %s mode.", target.name)

        try:
            self.restarter.restart()
        except RestartError as e:
            raise RestartError(
                f"Failed to restart MPD service: {e}", output=e.output, returncode=e.returncode
            ) from e
        logger.info("MPD service restarted successfully for %s mode.", target.name)

        return f"MPD successfully switched to {target.name} mode."
