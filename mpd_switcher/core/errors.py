class SwitcherError(Exception):
    """Base class for failures that are reported to the API client."""

    http_status = 500


class DiscoveryError(SwitcherError):
    """The config directory could not be scanned."""


class ModeNotFoundError(SwitcherError):
    http_status = 400

    def __init__(self, key: str):
        super().__init__(f"Invalid target mode specified: {key}")
        self.key = key


class FragmentReadError(SwitcherError):
    """A base or mode fragment could not be read."""


class ConfigWriteError(SwitcherError):
    """The composed mpd.conf could not be written."""


class RestartError(SwitcherError):
    """The service manager command failed."""

    def __init__(self, message: str, output: str = "", returncode=None):
        super().__init__(message)
        self.output = output
        self.returncode = returncode
