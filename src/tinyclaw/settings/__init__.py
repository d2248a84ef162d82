"""
Settings store shared by the agent and team registries.
"""

from __future__ import annotations

from tinyclaw.settings.store import SettingsStore, atomic_write_text

__all__ = ["SettingsStore", "atomic_write_text"]
