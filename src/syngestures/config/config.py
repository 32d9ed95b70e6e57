"""
Configuration resolution for syngestures.

Handles:
- Walking the system and user sources in precedence order
- Merging every source into one ConfigurationStore
- Collecting diagnostics for the caller to render
"""

from pathlib import Path
from typing import Iterable, List, Optional
import logging

from .loader import GestureParser, load_config_file, try_load_config_file
from .models import (
    ConfigurationStore,
    Diagnostic,
    Resolution,
    Severity,
)
from .paths import ConfigSource, PathEnvironment, SourceKind, SourceResolver
from .scanner import scan_directory

logger = logging.getLogger(__name__)

NO_CONFIGURATION = "No configuration found!"

_LOG_LEVELS = {
    Severity.ENVIRONMENT: logging.WARNING,
    Severity.SOURCE: logging.ERROR,
    Severity.ENTRY: logging.ERROR,
    Severity.EMPTY: logging.WARNING,
}


class ConfigurationLoader:
    """
    Resolves the layered syngestures configuration.

    Sources are applied lowest precedence first (system file, system
    directory, user file, user directory), so later sources override
    earlier ones for the same device and gesture. A failing source never
    stops the sources after it.
    """

    def __init__(self, resolver: Optional[SourceResolver] = None,
                 gesture_parser: Optional[GestureParser] = None):
        """
        Initialize the loader.

        Args:
            resolver: Source resolver (defaults to the installed prefix and
                the process environment)
            gesture_parser: Builds a gesture from a record's fields
        """
        self.resolver = resolver or SourceResolver()
        self.gesture_parser = gesture_parser

    def load(self) -> Resolution:
        """
        Run a full resolution pass.

        Each call builds a new store; the returned store is frozen.

        Returns:
            The resolved store and every diagnostic collected on the way
        """
        store = ConfigurationStore()
        resolved = self.resolver.resolve()
        diagnostics: List[Diagnostic] = list(resolved.diagnostics)

        for source in resolved.sources:
            if source.skipped:
                continue
            diagnostics.extend(self.apply_source(store, source))

        if store.is_empty:
            diagnostics.append(Diagnostic(
                severity=Severity.EMPTY,
                cause=NO_CONFIGURATION,
                searched=tuple(source.display for source in resolved.sources),
            ))
        else:
            logger.info(f"Configured {len(store)} devices")

        store.freeze()
        return Resolution(store=store, diagnostics=diagnostics)

    def apply_source(self, store: ConfigurationStore,
                     source: ConfigSource) -> List[Diagnostic]:
        """Apply one source to the store, returning its diagnostics."""
        if source.kind is SourceKind.FILE:
            return self.load_file(store, source.path)
        return self.load_directory(store, source.path)

    def load_file(self, store: ConfigurationStore, path: Path) -> List[Diagnostic]:
        """Apply a single file source; a missing file is not an error."""
        try:
            if not path.exists():
                logger.debug(f"Config file {path} not found")
                return []
        except OSError as e:
            return [Diagnostic(
                severity=Severity.SOURCE,
                cause=e.strerror or str(e),
                path=path,
            )]

        diagnostic = try_load_config_file(store, path, self.gesture_parser)
        return [diagnostic] if diagnostic else []

    def load_directory(self, store: ConfigurationStore,
                       directory: Path) -> List[Diagnostic]:
        """Apply every file in a drop-in directory source."""
        try:
            return scan_directory(
                directory,
                lambda path: load_config_file(store, path, self.gesture_parser),
            )
        except OSError as e:
            return [Diagnostic(
                severity=Severity.SOURCE,
                cause=e.strerror or str(e),
                path=directory,
            )]


def load_configuration(prefix: Optional[Path] = None,
                       environment: Optional[PathEnvironment] = None) -> Resolution:
    """
    Convenience function to resolve the configuration.

    Args:
        prefix: Override the installation prefix
        environment: Override the process environment

    Returns:
        The resolved store and its diagnostics
    """
    loader = ConfigurationLoader(SourceResolver(prefix, environment))
    return loader.load()


def log_diagnostics(diagnostics: Iterable[Diagnostic],
                    log: Optional[logging.Logger] = None) -> None:
    """Render diagnostics through logging, one record each."""
    log = log or logger
    for diagnostic in diagnostics:
        log.log(_LOG_LEVELS[diagnostic.severity], str(diagnostic))
