"""
Mode catalog discovery and current-mode resolution.

A mode is backed by a fragment file named ``config-<key>.mpd.conf.part`` in the
MPD config directory. The fragment's first line may carry
``# ConfigPartName: <label>``. The composed ``mpd.conf`` starts with
``# CurrentConfig: <key>``.
"""

import fnmatch
import logging
import os
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import DiscoveryError

logger = logging.getLogger(__name__)

PART_PREFIX = "config-"
PART_SUFFIX = ".mpd.conf.part"
PART_PATTERN = PART_PREFIX + "*" + PART_SUFFIX

PART_NAME_RE = re.compile(r"# ConfigPartName:\s*(.*)")
CURRENT_CONFIG_RE = re.compile(r"# CurrentConfig:\s*(.*)")
# Start of a word: a word character (any script) with none before it
_WORD_START_RE = re.compile(r"(?<!\w)\w")


class ConfigPart(BaseModel):
    """A single switchable mode."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    full_path: str = Field(default="", exclude=True)


UNKNOWN_PART = ConfigPart(key="unknown", name="<Unknown>")


def title_case(key: str) -> str:
    """Uppercase the first letter of every word: ``usb-dac`` -> ``Usb-Dac``."""
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), key)


def part_key(filename: str) -> str:
    return filename[len(PART_PREFIX):-len(PART_SUFFIX)]


def parse_part_name(first_line: str) -> Optional[str]:
    match = PART_NAME_RE.search(first_line)
    if not match:
        return None
    return match.group(1).strip() or None


def parse_current_key(first_line: str) -> Optional[str]:
    match = CURRENT_CONFIG_RE.search(first_line)
    if not match:
        return None
    return match.group(1).strip() or None


def read_first_line(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.readline().rstrip("\r\n")


def _part_name(path: str, key: str) -> str:
    try:
        name = parse_part_name(read_first_line(path))
    except OSError as e:
        logger.debug("Cannot read %s, falling back to key: %s", path, e)
        name = None
    return name or title_case(key)


def discover_modes(config_dir: str) -> List[ConfigPart]:
    """Scan config_dir for mode fragments. Raises DiscoveryError if it cannot be listed."""
    try:
        filenames = sorted(
            entry.name
            for entry in os.scandir(config_dir)
            if fnmatch.fnmatchcase(entry.name, PART_PATTERN)
        )
    except OSError as e:
        raise DiscoveryError(f"failed to scan {config_dir}: {e}") from e

    parts = []
    for filename in filenames:
        path = os.path.join(config_dir, filename)
        key = part_key(filename)
        parts.append(ConfigPart(key=key, name=_part_name(path, key), full_path=path))
    return parts


def find_mode(parts: List[ConfigPart], key: str) -> Optional[ConfigPart]:
    for part in parts:
        if part.key == key:
            return part
    return None


def resolve_current_mode(config_dir: str, mpd_conf_path: str) -> ConfigPart:
    """
    Return the mode recorded in mpd.conf's marker line.

    Never raises: every failure degrades to UNKNOWN_PART.
    """
    try:
        first_line = read_first_line(mpd_conf_path)
    except OSError as e:
        logger.warning("Error reading %s: %s", mpd_conf_path, e)
        return UNKNOWN_PART

    key = parse_current_key(first_line)
    if key is None:
        logger.info("No CurrentConfig marker in %s", mpd_conf_path)
        return UNKNOWN_PART

    try:
        parts = discover_modes(config_dir)
    except DiscoveryError as e:
        logger.warning("Error discovering modes: %s", e)
        return UNKNOWN_PART

    part = find_mode(parts, key)
    if part is None:
        logger.warning("mpd.conf marker names unknown mode '%s'", key)
        return UNKNOWN_PART
    return part


def compose_config(key: str, base_content: bytes, part_content: bytes) -> bytes:
    """Marker line, then the base and mode fragments joined byte-for-byte."""
    marker = f"# CurrentConfig: {key}\n".encode("utf-8")
    return marker + base_content + part_content
