import os
from pydantic import Field, field_validator
from .base import BaseConfigModel


class MpdConfig(BaseConfigModel):
    config_dir: str = Field(default="~/.config/mpd", min_length=1, validate_default=True)
    systemd_unit_name: str = Field(default="mpd.service", min_length=1)
    use_sudo: bool = False

    @field_validator("config_dir")
    @classmethod
    def expand_home(cls, value: str) -> str:
        return os.path.expanduser(value)

    @property
    def base_part_path(self) -> str:
        return os.path.join(self.config_dir, "base.mpd.conf.part")

    @property
    def mpd_conf_path(self) -> str:
        return os.path.join(self.config_dir, "mpd.conf")
