"""
CLI module for syngestures.

Provides the syngestures-ctl command-line tool.
"""

from .syngestures_ctl import ConfigController, main

__all__ = ["ConfigController", "main"]
