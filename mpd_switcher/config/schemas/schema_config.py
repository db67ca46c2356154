from pydantic import Field
from .base import BaseConfigModel
from .server_config import ServerConfig
from .mpd_config import MpdConfig


class ConfigSchema(BaseConfigModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    mpd: MpdConfig = Field(default_factory=MpdConfig)
