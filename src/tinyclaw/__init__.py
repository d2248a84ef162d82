"""
TinyClaw - agent and team registry.

Keeps team membership in the shared settings file consistent with the
agent registry and with each agent's generated AGENTS.md section.
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "TinyClaw Team"

__all__ = ["__version__"]
