"""
Configuration module for syngestures.

Resolves the layered gesture configuration from system and user sources.
"""

from .models import (
    Action,
    ActionKind,
    ConfigError,
    ConfigParseError,
    ConfigurationStore,
    Diagnostic,
    Resolution,
    Severity,
)
from .paths import (
    APP_NAME,
    CONFIG_SUFFIX,
    PREFIX,
    ConfigHomeError,
    ConfigSource,
    PathEnvironment,
    ResolvedSources,
    SourceKind,
    SourceLevel,
    SourceResolver,
)
from .loader import (
    DeviceBindings,
    DocumentParser,
    load_config_file,
    read_config_file,
    try_load_config_file,
)
from .scanner import scan_directory
from .config import (
    ConfigurationLoader,
    load_configuration,
    log_diagnostics,
)

__all__ = [
    "Action",
    "ActionKind",
    "ConfigError",
    "ConfigParseError",
    "ConfigurationStore",
    "Diagnostic",
    "Resolution",
    "Severity",
    "APP_NAME",
    "CONFIG_SUFFIX",
    "PREFIX",
    "ConfigHomeError",
    "ConfigSource",
    "PathEnvironment",
    "ResolvedSources",
    "SourceKind",
    "SourceLevel",
    "SourceResolver",
    "DeviceBindings",
    "DocumentParser",
    "load_config_file",
    "read_config_file",
    "try_load_config_file",
    "scan_directory",
    "ConfigurationLoader",
    "load_configuration",
    "log_diagnostics",
]
