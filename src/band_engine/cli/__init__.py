"""
CLI Module

Command-line interface for checking answer keys and previewing bands.
"""

from .commands import cli

__all__ = ["cli"]
