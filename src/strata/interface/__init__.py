"""
Interface module - command-line entry point.
"""

from strata.interface.cli import app

__all__ = ["app"]
