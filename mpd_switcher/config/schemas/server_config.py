from pydantic import Field
from .base import BaseConfigModel


class ServerConfig(BaseConfigModel):
    port: int = Field(default=6279, ge=1, le=65535)
    # Dev only: port of the frontend dev server, enables the reverse proxy
    frontend_port: int = Field(default=0, ge=0, le=65535)
    expose: bool = False
    open_browser: bool = False
    log_file: str = "logs/app.log"

    @property
    def host(self) -> str:
        return "0.0.0.0" if self.expose else "127.0.0.1"

    @property
    def proxy_enabled(self) -> bool:
        return self.frontend_port > 0
