"""
Configuration search paths for syngestures.

Sources are returned lowest precedence first:
- <prefix>/etc/syngestures.toml
- <prefix>/etc/syngestures.d/*.toml
- <config-home>/syngestures.toml
- <config-home>/syngestures.d/*.toml

<config-home> is $XDG_CONFIG_HOME, or $HOME/.config when that is unset.
"""

import os
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from .models import ConfigError, Diagnostic, Severity


APP_NAME = "syngestures"
# Installation prefix, replaced at packaging time
PREFIX = "/usr/local"
CONFIG_SUFFIX = ".toml"
XDG_CONFIG_HOME_VAR = "XDG_CONFIG_HOME"


class ConfigHomeError(ConfigError):
    """Raised when the user configuration directory cannot be determined."""
    pass


class SourceLevel(Enum):
    """Who owns a configuration source."""
    SYSTEM = auto()
    USER = auto()


class SourceKind(Enum):
    """Shape of a configuration source."""
    FILE = auto()
    DIRECTORY = auto()


@dataclass(frozen=True)
class ConfigSource:
    """
    One candidate configuration location.

    A source with no path was skipped by the resolver; its pattern still
    describes where it would have been looked for.
    """
    level: SourceLevel
    kind: SourceKind
    pattern: str
    path: Optional[Path] = None

    @property
    def skipped(self) -> bool:
        return self.path is None

    @property
    def display(self) -> str:
        """Human-readable search location."""
        if self.path is None:
            return self.pattern
        if self.kind is SourceKind.DIRECTORY:
            return f"{self.path}/*{CONFIG_SUFFIX}"
        return str(self.path)


@dataclass
class ResolvedSources:
    """Sources in precedence order, plus any resolver diagnostics."""
    sources: List[ConfigSource] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _default_home() -> Optional[str]:
    home = os.path.expanduser("~")
    if not home or home.startswith("~"):
        return None
    return home


def _is_valid_text(value: str) -> bool:
    # Undecodable bytes in os.environ come through as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class PathEnvironment:
    """
    Process state the resolver depends on.

    Wraps the environment and the home-directory lookup so tests can
    substitute fixed values.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 home_lookup: Optional[Callable[[], Optional[str]]] = None):
        """
        Initialize the path environment.

        Args:
            environ: Environment mapping (defaults to os.environ)
            home_lookup: Returns the home directory, or None if unknown
        """
        self.environ = os.environ if environ is None else environ
        self.home_lookup = home_lookup or _default_home

    def config_home(self) -> Path:
        """
        Get the user configuration directory.

        Returns:
            $XDG_CONFIG_HOME if set, else <home>/.config

        Raises:
            ConfigHomeError: If the override is invalid or no home is known
        """
        override = self.environ.get(XDG_CONFIG_HOME_VAR)
        # An empty value counts as unset, as in the XDG base directory spec
        if override:
            if not _is_valid_text(override):
                raise ConfigHomeError(f"Invalid {XDG_CONFIG_HOME_VAR}")
            return Path(override)

        home = self.home_lookup()
        if not home:
            raise ConfigHomeError("Could not determine user home directory!")
        return Path(home) / ".config"


class SourceResolver:
    """Computes the ordered configuration sources."""

    def __init__(self, prefix: Optional[Path] = None,
                 environment: Optional[PathEnvironment] = None,
                 app_name: str = APP_NAME):
        self.prefix = Path(prefix) if prefix is not None else Path(PREFIX)
        self.environment = environment or PathEnvironment()
        self.app_name = app_name

    def system_sources(self) -> List[ConfigSource]:
        etc = self.prefix / "etc"
        file_path = etc / f"{self.app_name}{CONFIG_SUFFIX}"
        dir_path = etc / f"{self.app_name}.d"
        return [
            ConfigSource(SourceLevel.SYSTEM, SourceKind.FILE,
                         str(file_path), file_path),
            ConfigSource(SourceLevel.SYSTEM, SourceKind.DIRECTORY,
                         f"{dir_path}/*{CONFIG_SUFFIX}", dir_path),
        ]

    def user_patterns(self) -> List[str]:
        """Search patterns for user sources, independent of the environment."""
        file_name = f"{self.app_name}{CONFIG_SUFFIX}"
        dir_glob = f"{self.app_name}.d/*{CONFIG_SUFFIX}"
        return [
            f"${XDG_CONFIG_HOME_VAR}/{file_name} (or $HOME/.config/{file_name})",
            f"${XDG_CONFIG_HOME_VAR}/{dir_glob} (or $HOME/.config/{dir_glob})",
        ]

    def user_sources(self, config_home: Optional[Path]) -> List[ConfigSource]:
        file_pattern, dir_pattern = self.user_patterns()
        if config_home is None:
            return [
                ConfigSource(SourceLevel.USER, SourceKind.FILE, file_pattern),
                ConfigSource(SourceLevel.USER, SourceKind.DIRECTORY, dir_pattern),
            ]
        return [
            ConfigSource(SourceLevel.USER, SourceKind.FILE, file_pattern,
                         config_home / f"{self.app_name}{CONFIG_SUFFIX}"),
            ConfigSource(SourceLevel.USER, SourceKind.DIRECTORY, dir_pattern,
                         config_home / f"{self.app_name}.d"),
        ]

    def resolve(self) -> ResolvedSources:
        """
        Compute all sources, lowest precedence first.

        User sources are marked skipped, with a diagnostic, when the user
        configuration directory cannot be determined.
        """
        resolved = ResolvedSources(sources=self.system_sources())

        try:
            config_home: Optional[Path] = self.environment.config_home()
        except ConfigHomeError as e:
            resolved.diagnostics.append(Diagnostic(
                severity=Severity.ENVIRONMENT,
                cause=f"{e}; skipping user configuration",
            ))
            config_home = None

        resolved.sources.extend(self.user_sources(config_home))
        return resolved
