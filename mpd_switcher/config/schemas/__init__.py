from .schema_config import ConfigSchema
from .server_config import ServerConfig
from .mpd_config import MpdConfig
from .base import BaseConfigModel
