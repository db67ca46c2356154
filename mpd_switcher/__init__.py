from flask import Flask
import logging
import os
from logging.handlers import RotatingFileHandler

from mpd_switcher.config.schemas import ConfigSchema
from mpd_switcher.core.systemd import ServiceRestarter
from mpd_switcher.services.mode_service import ModeService

__version__ = "0.1.0"


def _configure_file_logging(app: Flask, log_file: str):
    log_path = os.path.abspath(log_file)
    for handler in app.logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == log_path:
            return

    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(log_file, maxBytes=1048576, backupCount=10)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    file_handler.setLevel(logging.INFO)
    # app.logger is the "mpd_switcher" logger, so module loggers propagate here
    app.logger.addHandler(file_handler)


def create_app(settings: ConfigSchema = None, restarter: ServiceRestarter = None):
    """Application factory. Settings are passed in explicitly, never read from a global."""
    settings = settings or ConfigSchema()

    # static_folder is disabled: the web blueprint owns every non-API path
    app = Flask(__name__, static_folder=None)
    app.config["SWITCHER_SETTINGS"] = settings
    app.json.sort_keys = False

    if settings.server.log_file:
        _configure_file_logging(app, settings.server.log_file)
    if app.logger.level == logging.NOTSET:
        app.logger.setLevel(logging.INFO)
    app.logger.info('MPD Switcher Startup (config dir: %s)', settings.mpd.config_dir)

    app.extensions["mode_service"] = ModeService(
        settings.mpd, restarter or ServiceRestarter(settings.mpd)
    )

    # Register blueprints
    from mpd_switcher.api.routes.modes import modes_bp
    from mpd_switcher.web.routes import web

    app.register_blueprint(modes_bp)
    app.register_blueprint(web)

    return app
