"""
Loading of a single syngestures configuration file.

A file holds one or more device blocks:

    [[device]]
    device = "/dev/input/by-path/platform-i2c_designware.1-event-mouse"
    gestures = [
        { type = "swipe", direction = "left", fingers = 3, execute = "xdotool key alt+Left" },
    ]

The whole file is parsed before anything is applied, so a bad file leaves
the store exactly as it was.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple
import logging
import tomllib

from ..events import Gesture
from .models import (
    Action,
    ConfigParseError,
    ConfigurationStore,
    Device,
    Diagnostic,
    Severity,
)

logger = logging.getLogger(__name__)

GestureParser = Callable[[Mapping[str, Any]], Gesture]

ACTION_FIELD = "execute"
DEVICE_BLOCK_FIELDS = ("device", "gestures")


@dataclass
class DeviceBindings:
    """Bindings parsed from one device block."""
    device: Device
    bindings: List[Tuple[Gesture, Action]] = field(default_factory=list)


def _type_name(value: Any) -> str:
    if isinstance(value, dict):
        return "table"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


class DocumentParser:
    """Parses a decoded document into device bindings."""

    def __init__(self, gesture_parser: Optional[GestureParser] = None,
                 path: Optional[Path] = None):
        self.gesture_parser = gesture_parser or Gesture.from_fields
        self.path = path

    def _error(self, location: str, message: str) -> ConfigParseError:
        return ConfigParseError(self.path, f"{location}: {message}")

    def parse(self, data: Mapping[str, Any]) -> List[DeviceBindings]:
        """
        Parse a document.

        Raises:
            ConfigParseError: If the document does not match the schema
        """
        keys = set(data)
        if "devices" in keys and "device" in keys:
            raise ConfigParseError(self.path, "duplicate field 'devices' (alias 'device')")
        unknown = sorted(keys - {"devices", "device"})
        if unknown:
            raise ConfigParseError(self.path, f"unknown field '{unknown[0]}'")
        if not keys:
            raise ConfigParseError(self.path, "missing field 'devices'")

        key = "devices" if "devices" in keys else "device"
        blocks = data[key]
        # A single device block may be given directly
        if isinstance(blocks, dict):
            blocks = [blocks]
        if not isinstance(blocks, list):
            raise self._error(key, f"expected array of tables, found {_type_name(blocks)}")

        return [self._parse_block(f"{key}[{index}]", block)
                for index, block in enumerate(blocks)]

    def _parse_block(self, location: str, block: Any) -> DeviceBindings:
        if not isinstance(block, dict):
            raise self._error(location, f"expected table, found {_type_name(block)}")

        unknown = sorted(set(block) - set(DEVICE_BLOCK_FIELDS))
        if unknown:
            raise self._error(location, f"unknown field '{unknown[0]}'")
        for name in DEVICE_BLOCK_FIELDS:
            if name not in block:
                raise self._error(location, f"missing field '{name}'")

        device = block["device"]
        if not isinstance(device, str):
            raise self._error(f"{location}.device",
                              f"expected string, found {_type_name(device)}")

        records = block["gestures"]
        if not isinstance(records, list):
            raise self._error(f"{location}.gestures",
                              f"expected array, found {_type_name(records)}")

        parsed = DeviceBindings(device=device)
        for index, record in enumerate(records):
            parsed.bindings.append(
                self._parse_record(f"{location}.gestures[{index}]", record))
        return parsed

    def _parse_record(self, location: str, record: Any) -> Tuple[Gesture, Action]:
        if not isinstance(record, dict):
            raise self._error(location, f"expected table, found {_type_name(record)}")

        fields = dict(record)
        command = fields.pop(ACTION_FIELD, None)
        if command is None:
            action = Action.none()
        elif isinstance(command, str):
            action = Action.execute(command)
        else:
            raise self._error(f"{location}.{ACTION_FIELD}",
                              f"expected string, found {_type_name(command)}")

        # Any parser failure rejects the file, whatever parser is injected
        try:
            gesture = self.gesture_parser(fields)
        except Exception as e:
            raise self._error(location, str(e) or type(e).__name__) from e
        return gesture, action


def read_config_file(path: Path,
                     gesture_parser: Optional[GestureParser] = None) -> List[DeviceBindings]:
    """
    Read and parse one configuration file without applying it.

    Raises:
        OSError: If the file cannot be read
        ConfigParseError: If the file is not valid TOML or breaks the schema
    """
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(path, str(e)) from e
    return DocumentParser(gesture_parser, path).parse(data)


def apply_bindings(store: ConfigurationStore, parsed: List[DeviceBindings]) -> int:
    """
    Apply parsed bindings to the store.

    Returns:
        Number of gesture bindings written
    """
    count = 0
    for block in parsed:
        store.add_device(block.device)
        for gesture, action in block.bindings:
            store.bind(block.device, gesture, action)
            count += 1
    return count


def load_config_file(store: ConfigurationStore, path: Path,
                     gesture_parser: Optional[GestureParser] = None) -> int:
    """
    Load one configuration file into the store.

    Args:
        store: Store to apply the file's bindings to
        path: Path of the TOML file
        gesture_parser: Builds a gesture from a record's fields

    Returns:
        Number of gesture bindings written

    Raises:
        OSError: If the file cannot be read
        ConfigParseError: If the file is malformed; the store is untouched
    """
    parsed = read_config_file(path, gesture_parser)
    count = apply_bindings(store, parsed)
    logger.info(f"Loaded {count} gesture bindings from {path}")
    return count


def try_load_config_file(store: ConfigurationStore, path: Path,
                         gesture_parser: Optional[GestureParser] = None,
                         severity: Severity = Severity.SOURCE) -> Optional[Diagnostic]:
    """
    Load a configuration file, reporting failure instead of raising.

    Returns:
        A diagnostic naming the path and cause, or None on success
    """
    try:
        load_config_file(store, path, gesture_parser)
    except ConfigParseError as e:
        return Diagnostic(severity=severity, cause=e.message, path=path)
    except OSError as e:
        return Diagnostic(severity=severity, cause=e.strerror or str(e), path=path)
    return None
