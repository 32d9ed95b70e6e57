"""
Scanning of drop-in configuration directories (syngestures.d).
"""

import os
from pathlib import Path
from typing import Any, Callable, List
import logging

from .models import Diagnostic, Severity
from .paths import CONFIG_SUFFIX

logger = logging.getLogger(__name__)

FileCallback = Callable[[Path], Any]


def scan_directory(directory: Path, process: FileCallback,
                   suffix: str = CONFIG_SUFFIX) -> List[Diagnostic]:
    """
    Pass every configuration file in a directory to a callback.

    The directory is not searched recursively, and subdirectories and files
    without the suffix are skipped. Files are visited in file-name order, so
    when two files bind the same gesture the one sorting last wins.

    A failure on one entry is recorded and the scan moves on.

    Args:
        directory: Directory to scan; missing or non-directory paths are ignored
        process: Called with the path of each configuration file
        suffix: Required file extension, matched exactly

    Returns:
        One ENTRY diagnostic per failed entry

    Raises:
        OSError: If the directory itself cannot be listed
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []

    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    diagnostics: List[Diagnostic] = []
    for entry in entries:
        path = Path(entry.path)
        try:
            # Symlinks to directories are not skipped here; they fail to load
            if entry.is_dir(follow_symlinks=False):
                logger.debug(f"Skipping subdirectory {path}")
                continue
            if path.suffix != suffix:
                logger.debug(f"Skipping {path}: not a {suffix} file")
                continue
            process(path)
        except Exception as e:
            cause = getattr(e, "message", None) or getattr(e, "strerror", None) or str(e)
            diagnostics.append(Diagnostic(
                severity=Severity.ENTRY,
                cause=cause,
                path=path,
            ))

    return diagnostics
