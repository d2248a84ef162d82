"""
TinyClaw CLI - Command Line Interface

Thin front end over the team registry.
"""

from .main import cli, main

__all__ = ["cli", "main"]
