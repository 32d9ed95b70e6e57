"""
Data models for syngestures configuration.

These models represent the result of configuration resolution:
- Action: What to do when a gesture is recognized
- ConfigurationStore: Device -> Gesture -> Action bindings
- Diagnostic: A problem found while resolving, kept for the caller to render
- Resolution: The finished store plus its diagnostics
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..events import Gesture

Device = str
GestureMap = Dict[Gesture, "Action"]


class ConfigError(Exception):
    """Configuration-related error."""
    pass


class ConfigParseError(ConfigError):
    """Raised when a configuration document does not match the schema."""

    def __init__(self, path: Optional[Path], message: str):
        self.path = path
        self.message = message
        super().__init__(message)


class ActionKind(Enum):
    """Type of action bound to a gesture."""
    NONE = auto()         # Inert gesture
    EXECUTE = auto()      # Run a command through the executor


@dataclass(frozen=True)
class Action:
    """
    Effect bound to a gesture.

    NONE carries no command. EXECUTE carries the command string, which is
    handed to the executor untouched.
    """
    kind: ActionKind = ActionKind.NONE
    command: Optional[str] = None

    def __post_init__(self):
        if self.kind is ActionKind.EXECUTE and not isinstance(self.command, str):
            raise ConfigError("execute action requires a command string")
        if self.kind is ActionKind.NONE and self.command is not None:
            raise ConfigError("no-op action cannot carry a command")

    @classmethod
    def none(cls) -> 'Action':
        return cls()

    @classmethod
    def execute(cls, command: str) -> 'Action':
        return cls(ActionKind.EXECUTE, command)

    @property
    def is_none(self) -> bool:
        return self.kind is ActionKind.NONE

    def __str__(self) -> str:
        if self.is_none:
            return "none"
        return f"execute {self.command!r}"


class ConfigurationStore:
    """
    Resolved gesture bindings for every configured device.

    Devices accumulate across sources; within a device, a later write for
    the same gesture replaces the earlier one. Once frozen the store
    rejects further writes.
    """

    def __init__(self):
        self._devices: Dict[Device, GestureMap] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def devices(self) -> List[Device]:
        """Get all configured devices."""
        return list(self._devices.keys())

    @property
    def is_empty(self) -> bool:
        return not self._devices

    def __len__(self) -> int:
        return len(self._devices)

    def __contains__(self, device: object) -> bool:
        return device in self._devices

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices)

    def _check_writable(self) -> None:
        if self._frozen:
            raise ConfigError("Configuration store is frozen")

    def add_device(self, device: Device) -> None:
        """
        Register a device, with no gestures if it is new.

        Raises:
            ConfigError: If the store is frozen
        """
        self._check_writable()
        self._devices.setdefault(device, {})

    def bind(self, device: Device, gesture: Gesture, action: Action) -> None:
        """
        Bind an action to a gesture on a device, replacing any existing one.

        Raises:
            ConfigError: If the store is frozen
        """
        self._check_writable()
        self._devices.setdefault(device, {})[gesture] = action

    def get_gestures(self, device: Device) -> Dict[Gesture, Action]:
        """Get a copy of the bindings for a device (empty if unknown)."""
        return dict(self._devices.get(device, {}))

    def get_action(self, device: Device, gesture: Gesture) -> Optional[Action]:
        """Get the action for a gesture on a device, if one is bound."""
        return self._devices.get(device, {}).get(gesture)

    def bindings(self) -> Iterator[Tuple[Device, Gesture, Action]]:
        """Iterate over all bindings, gestures in sorted order per device."""
        for device, gestures in self._devices.items():
            for gesture in sorted(gestures):
                yield device, gesture, gestures[gesture]

    def freeze(self) -> None:
        """Stop accepting writes."""
        self._frozen = True


class Severity(Enum):
    """How far a resolution problem reaches."""
    ENVIRONMENT = auto()  # User-level sources skipped
    SOURCE = auto()       # A whole file or directory contributed nothing
    ENTRY = auto()        # One file inside a scanned directory failed
    EMPTY = auto()        # Nothing configured after all sources


@dataclass(frozen=True)
class Diagnostic:
    """A problem found during resolution."""
    severity: Severity
    cause: str
    path: Optional[Path] = None
    # Search locations, for the EMPTY summary
    searched: Tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.severity is Severity.EMPTY:
            lines = [self.cause,
                     "Searched for configuration files in the following locations:"]
            lines.extend(f"* {location}" for location in self.searched)
            return "\n".join(lines)
        if self.path is None:
            return self.cause
        if self.severity is Severity.SOURCE:
            return f"Error loading configuration from {self.path}: {self.cause}"
        return f"Error loading {self.path}: {self.cause}"


@dataclass
class Resolution:
    """Outcome of a resolution pass."""
    store: ConfigurationStore
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.store.is_empty
