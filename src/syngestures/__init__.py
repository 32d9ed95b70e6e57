"""
syngestures configuration library.

Resolves which action the syngestures daemon performs for each gesture
on each touch device, from layered TOML configuration.

Modules:
- events: Gesture vocabulary
- config: Source discovery, parsing and resolution
- cli: Command-line interface

Example usage:
    from syngestures.config import load_configuration, log_diagnostics

    resolution = load_configuration()
    log_diagnostics(resolution.diagnostics)

    for device, gesture, action in resolution.store.bindings():
        print(device, gesture, action)
"""

__version__ = "0.1.0"

# Convenience imports
from .events import (
    Direction,
    Gesture,
    GestureType,
)
from .config import (
    Action,
    ConfigurationLoader,
    ConfigurationStore,
    Diagnostic,
    Resolution,
    load_configuration,
    log_diagnostics,
)

__all__ = [
    "__version__",
    "Direction",
    "Gesture",
    "GestureType",
    "Action",
    "ConfigurationLoader",
    "ConfigurationStore",
    "Diagnostic",
    "Resolution",
    "load_configuration",
    "log_diagnostics",
]
