import logging
import subprocess
from typing import List

from mpd_switcher.config.schemas import MpdConfig
from .errors import RestartError

logger = logging.getLogger(__name__)


class ServiceRestarter:
    """Restarts the MPD systemd unit, user-scoped or through sudo."""

    def __init__(self, mpd_config: MpdConfig):
        self.config = mpd_config

    def build_command(self) -> List[str]:
        unit = self.config.systemd_unit_name
        if self.config.use_sudo:
            return ["sudo", "systemctl", "restart", unit]
        return ["systemctl", "--user", "restart", unit]

    def restart(self) -> str:
        """Run the restart command once. Returns combined output, raises RestartError."""
        cmd = self.build_command()
        cmd_str = " ".join(cmd)
        logger.info("Running: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                cwd=self.config.config_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            raise RestartError(f"command failed: {cmd_str}, error: {e}") from e

        output = result.stdout or ""
        if result.returncode != 0:
            raise RestartError(
                f"command failed: {cmd_str}, exit status {result.returncode}, output: {output.strip()}",
                output=output,
                returncode=result.returncode,
            )
        return output
