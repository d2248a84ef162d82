"""
Configuration subsystem.
"""

from __future__ import annotations

from tinyclaw.config.manager import ConfigManager

__all__ = ["ConfigManager"]
