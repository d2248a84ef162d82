"""
Teams subsystem - team registry and AGENTS.md team section sync.
"""

from __future__ import annotations

from tinyclaw.teams.docs import TEAM_BLOCK_END, TEAM_BLOCK_START, TeamDocSync
from tinyclaw.teams.models import AgentRecord, CreateResult, DeleteResult, TeamRecord
from tinyclaw.teams.registry import TeamRegistry, is_confirmed

__all__ = [
    "AgentRecord",
    "CreateResult",
    "DeleteResult",
    "TEAM_BLOCK_END",
    "TEAM_BLOCK_START",
    "TeamDocSync",
    "TeamRecord",
    "TeamRegistry",
    "is_confirmed",
]
