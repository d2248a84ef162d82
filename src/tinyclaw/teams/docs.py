"""
TeamDocSync - keep each agent's AGENTS.md "Team Collaboration" block current.

The block is machine-generated and delimited by two marker lines. It is
always regenerated in full from settings.json, so any manual edits inside the
markers are discarded on the next sync.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from loguru import logger

from tinyclaw.settings.store import SettingsStore, atomic_write_text
from tinyclaw.teams.models import AgentRecord, TeamRecord, agents_from_settings, teams_from_settings

TEAM_BLOCK_START = "<!-- TINYCLAW_TEAM_START -->"
TEAM_BLOCK_END = "<!-- TINYCLAW_TEAM_END -->"

_LINE = re.compile(r"[^\n]*\n|[^\n]+$")
_BLANK = " \t\r\n"

HANDOFF_INTRO = (
    "You are part of the following team(s). You can mention teammates using @teammate_id "
    "in your responses to hand off work or ask for help."
)
HANDOFF_EXAMPLE = [
    "To hand off to a teammate, include @teammate_id in your response. Example:",
    '"I\'ve finished my part. @reviewer please review the changes."',
]


@dataclass(frozen=True)
class TeamSectionView:
    team_id: str
    name: str
    teammates: List[Tuple[str, str]] = field(default_factory=list)  # (agent id, display name)


def build_views(
    agent_id: str, agents: Dict[str, AgentRecord], teams: Dict[str, TeamRecord]
) -> List[TeamSectionView]:
    """One view per team containing ``agent_id``, in settings order."""
    views: List[TeamSectionView] = []
    for tid, team in teams.items():
        if not team.has_member(agent_id):
            continue
        mates = []
        for mate_id in team.agents:
            if mate_id == agent_id:
                continue
            mate = agents.get(mate_id)
            mates.append((mate_id, mate.display_name if mate else mate_id))
        views.append(TeamSectionView(team_id=tid, name=team.display_name, teammates=mates))
    return views


def render_team_section(views: List[TeamSectionView], newline: str = "\n") -> str:
    lines = [TEAM_BLOCK_START, "## Team Collaboration", "", HANDOFF_INTRO, ""]
    for view in views:
        lines.append(f"### Team: {view.name} (@{view.team_id})")
        lines.append("")
        lines.append("Teammates:")
        lines.extend(f"- @{mate_id} ({mate_name})" for mate_id, mate_name in view.teammates)
        lines.append("")
        lines.extend(HANDOFF_EXAMPLE)
        lines.append("")
    lines.append(TEAM_BLOCK_END)
    return newline.join(lines) + newline


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping line endings; other separators stay inside lines."""
    return _LINE.findall(text)


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def strip_team_section(text: str) -> Tuple[str, bool]:
    """
    Remove every generated block, markers included.

    An unterminated block runs to end of file. When a block was removed,
    trailing blank lines are trimmed so regeneration does not accumulate
    separators. Text outside the block is kept byte for byte.
    Returns ``(text, found)``.
    """
    kept: List[str] = []
    inside = False
    found = False
    for line in split_lines(text):
        if inside:
            if TEAM_BLOCK_END in line:
                inside = False
            continue
        if TEAM_BLOCK_START in line:
            inside = True
            found = True
            continue
        kept.append(line)

    if not found:
        return text, False
    return trim_trailing_blank_lines("".join(kept), detect_newline(text)), True


def trim_trailing_blank_lines(text: str, newline: str = "\n") -> str:
    """Drop blank lines at the end; non-empty results end with a line break."""
    lines = split_lines(text)
    while lines and not lines[-1].strip(_BLANK):
        lines.pop()
    if lines and not lines[-1].endswith("\n"):
        lines[-1] += newline
    return "".join(lines)


class TeamDocSync:
    """Regenerates the team block of one agent's documentation file."""

    def __init__(self, store: SettingsStore, *, docs_filename: str = "AGENTS.md") -> None:
        self._store = store
        self._docs_filename = docs_filename

    def doc_path(self, agent: Optional[AgentRecord]) -> Optional[Path]:
        if agent is None:
            return None
        workdir = agent.workdir
        if workdir is None or not workdir.is_dir():
            return None
        path = workdir / self._docs_filename
        return path if path.is_file() else None

    def sync(self, agent_id: str) -> bool:
        """
        Rewrite ``agent_id``'s team block from current settings.

        Returns True when the file changed. Agents without a working directory
        or documentation file are skipped.
        """
        data = self._store.load()
        agents = agents_from_settings(data.get("agents") or {})
        path = self.doc_path(agents.get(agent_id))
        if path is None:
            logger.debug(f"No {self._docs_filename} for agent '{agent_id}', skipping team sync")
            return False

        with path.open("r", encoding="utf-8", newline="") as f:
            original = f.read()
        newline = detect_newline(original)
        body, had_block = strip_team_section(original)
        views = build_views(agent_id, agents, teams_from_settings(data.get("teams") or {}))

        if not views:
            if not had_block:
                return False
            updated = body
        else:
            body = trim_trailing_blank_lines(body, newline)
            updated = body + (newline if body else "") + render_team_section(views, newline)

        if updated == original:
            return False

        atomic_write_text(path, updated)
        logger.debug(f"Updated team section in {path} ({len(views)} team(s))")
        return True
