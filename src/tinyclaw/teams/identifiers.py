"""
Identifier rules shared by agents and teams.

Team ids and agent ids live in one namespace: a message addressed to
``@dev`` must resolve to exactly one of them.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from tinyclaw.errors import IdentifierCollision, InvalidIdentifier, NamespaceConflict

_DISALLOWED = re.compile(r"[^a-z0-9_-]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_id(raw: str) -> str:
    """Lowercase ``raw`` and drop every character outside ``[a-z0-9_-]``."""
    normalized = _DISALLOWED.sub("", str(raw or "").lower())
    if not normalized:
        raise InvalidIdentifier(str(raw or ""))
    return normalized


def normalize_agent_ref(raw: str) -> str:
    """Member/leader selections: lowercase with whitespace removed. May be empty."""
    return _WHITESPACE.sub("", str(raw or "")).lower()


def ensure_available(candidate: str, agents: Mapping[str, Any], teams: Mapping[str, Any]) -> None:
    if candidate in teams:
        raise IdentifierCollision(candidate)
    if candidate in agents:
        raise NamespaceConflict(candidate)
