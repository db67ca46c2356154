import json
import os
import logging
from typing import Any, Dict, Mapping, Optional
from .schemas import ConfigSchema

logger = logging.getLogger(__name__)

ENV_PREFIX = "MPD_SWITCHER_"

# env suffix -> (section, field)
ENV_FIELDS = {
    "PORT": ("server", "port"),
    "FE_PORT": ("server", "frontend_port"),
    "EXPOSE": ("server", "expose"),
    "OPEN": ("server", "open_browser"),
    "LOG_FILE": ("server", "log_file"),
    "CONFIG_DIR": ("mpd", "config_dir"),
    "SYSTEMD_UNIT_NAME": ("mpd", "systemd_unit_name"),
    "SUDO": ("mpd", "use_sudo"),
}


class ConfigManager:
    """
    Builds the process settings once at startup.

    Layers, lowest first: schema defaults, an optional JSON settings file,
    MPD_SWITCHER_* environment variables, explicit overrides (CLI flags).
    """

    def __init__(
        self,
        settings_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings_path = os.path.expanduser(settings_path) if settings_path else None
        self.environ = os.environ if environ is None else environ

    def load(self, overrides: Optional[Dict[str, Dict[str, Any]]] = None) -> ConfigSchema:
        """Load and validate settings. Invalid env or override values raise ValidationError."""
        file_obj = ConfigSchema.load_best_effort(self._read_raw_json())
        data = file_obj.model_dump()

        for section, fields in self._read_env().items():
            data[section].update(fields)

        for section, fields in (overrides or {}).items():
            data[section].update({k: v for k, v in fields.items() if v is not None})

        config_obj = ConfigSchema.model_validate(data)
        logger.debug("[Config] Settings loaded: %s", config_obj.model_dump())
        return config_obj

    def _read_raw_json(self) -> Dict[str, Any]:
        """Read and decode the settings file, treating corruption as empty."""
        if not self.settings_path:
            return {}
        if not os.path.exists(self.settings_path):
            logger.warning("[Config] Settings file %s not found, using defaults", self.settings_path)
            return {}

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("[Config] Error reading %s: %s", self.settings_path, e)
            return {}

    def _read_env(self) -> Dict[str, Dict[str, str]]:
        found: Dict[str, Dict[str, str]] = {}
        for suffix, (section, field) in ENV_FIELDS.items():
            value = self.environ.get(ENV_PREFIX + suffix)
            if value is None or value == "":
                continue
            found.setdefault(section, {})[field] = value
        return found
