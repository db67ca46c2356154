import argparse
import logging
import sys
import threading
import time
import webbrowser

from pydantic import ValidationError

from mpd_switcher import create_app
from mpd_switcher.config import ConfigManager, ConfigSchema

logger = logging.getLogger(__name__)

BROWSER_DELAY = 1.0


def setup_logging(verbose=False):
    """Configure console logging on the root logger."""
    log_level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream=sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    root_logger.addHandler(console_handler)
    logging.getLogger("mpd_switcher").setLevel(log_level)


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Switch between MPD output configurations from a web UI"
    )
    parser.add_argument("--port", type=int,
                        help="Port for the backend server (default: 6279)")
    parser.add_argument("--fe-port", type=int, dest="frontend_port",
                        help="DEV ONLY: port of the frontend dev server (enables reverse proxy)")
    parser.add_argument("--config-dir",
                        help="Directory containing the mpd.conf parts (default: ~/.config/mpd)")
    parser.add_argument("--systemd-unit-name",
                        help="The systemd unit to restart (default: mpd.service)")
    parser.add_argument("--sudo", action="store_true", default=None, dest="use_sudo",
                        help="Use 'sudo systemctl' instead of 'systemctl --user'")
    parser.add_argument("--expose", action="store_true", default=None,
                        help="Listen on all interfaces so other devices in the LAN can use the app")
    parser.add_argument("--open", action="store_true", default=None, dest="open_browser",
                        help="Open the app in the default browser on startup")
    parser.add_argument("--settings",
                        help="Optional JSON settings file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose logging")
    return parser.parse_args(argv)


def build_settings(args, environ=None) -> ConfigSchema:
    overrides = {
        "server": {
            "port": args.port,
            "frontend_port": args.frontend_port,
            "expose": args.expose,
            "open_browser": args.open_browser,
        },
        "mpd": {
            "config_dir": args.config_dir,
            "systemd_unit_name": args.systemd_unit_name,
            "use_sudo": args.use_sudo,
        },
    }
    return ConfigManager(args.settings, environ=environ).load(overrides)


def app_url(settings: ConfigSchema) -> str:
    # Exposed or not, the browser runs on this machine
    return f"http://localhost:{settings.server.port}"


def open_browser_later(url: str, delay: float = BROWSER_DELAY) -> threading.Thread:
    """Fire-and-forget: open url after a fixed delay, not synchronized with server readiness."""
    def open_browser():
        time.sleep(delay)
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error as e:
            logger.warning("Failed to open browser: %s", e)
            opened = False
        if not opened:
            logger.info("Please open your web browser and navigate to %s", url)

    t = threading.Thread(target=open_browser, daemon=True)
    t.start()
    return t


def main(argv=None):
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        for error in e.errors():
            logger.error("Invalid setting %s: %s", ".".join(str(i) for i in error["loc"]), error["msg"])
        return 2

    app = create_app(settings)
    host, port = settings.server.host, settings.server.port
    logger.info("MPD Switcher backend listening on %s:%d", host, port)

    if settings.server.open_browser:
        url = app_url(settings)
        logger.info("Opening browser to %s", url)
        open_browser_later(url)

    try:
        app.run(host=host, port=port, debug=False, threaded=True)
    except OSError as e:
        logger.critical("Failed to listen on %s:%d: %s", host, port, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
