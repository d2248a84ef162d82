"""
Typed failures raised by the settings store and the team registry.

Callers (the CLI) catch ``TeamError`` and print ``str(e)``; the subclasses
let them tell the cases apart when a more specific message is wanted.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence


class TeamError(Exception):
    """Base class for every registry failure."""


class StoreMissing(TeamError):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"No settings file found at {self.path}. Run setup first.")


class StoreCorrupt(TeamError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Settings file {self.path} is not usable: {reason}")


class InvalidIdentifier(TeamError, ValueError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Invalid team ID: {raw!r} (use lowercase letters, digits, '_' or '-')")


class IdentifierCollision(TeamError):
    def __init__(self, team_id: str) -> None:
        self.team_id = team_id
        super().__init__(f"Team '{team_id}' already exists. Use 'team remove {team_id}' first.")


class NamespaceConflict(TeamError):
    def __init__(self, team_id: str) -> None:
        self.team_id = team_id
        super().__init__(
            f"'{team_id}' is already used as an agent ID. Team and agent IDs share the same namespace."
        )


class InsufficientMembers(TeamError, ValueError):
    def __init__(self, members: Sequence[str], minimum: int = 2) -> None:
        self.members = list(members)
        self.minimum = minimum
        super().__init__(f"A team requires at least {minimum} valid agents (got {len(self.members)}).")


class InvalidLeader(TeamError, ValueError):
    def __init__(self, leader: str, members: Sequence[str]) -> None:
        self.leader = leader
        self.members = list(members)
        super().__init__(f"Leader '{leader}' must be one of the selected agents: {', '.join(self.members)}")


class TeamNotFound(TeamError):
    def __init__(self, team_id: str, available: Optional[List[str]] = None) -> None:
        self.team_id = team_id
        self.available = list(available or [])
        super().__init__(f"Team '{team_id}' not found.")
