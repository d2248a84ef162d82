"""
TeamRegistry - create, inspect and remove teams in settings.json.

Teams are named groups of agents that collaborate via @teammate mentions.
All validation happens against a fresh read of the store before anything is
written; after a write, every affected agent's AGENTS.md is resynchronized.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from tinyclaw.errors import InsufficientMembers, InvalidLeader, TeamNotFound
from tinyclaw.settings.store import SettingsStore
from tinyclaw.teams.docs import TeamDocSync
from tinyclaw.teams.identifiers import ensure_available, normalize_agent_ref, normalize_id
from tinyclaw.teams.models import (
    AgentRecord,
    CreateResult,
    DeleteResult,
    TeamRecord,
    agents_from_settings,
    teams_from_settings,
)

_CONFIRM = re.compile(r"^[yY]")

MIN_TEAM_MEMBERS = 2


def is_confirmed(answer: Union[bool, str, None]) -> bool:
    """A delete proceeds on ``True`` or on an answer starting with y/Y."""
    if isinstance(answer, bool):
        return answer
    return bool(_CONFIRM.match(str(answer or "")))


class TeamRegistry:
    def __init__(
        self,
        store: SettingsStore,
        *,
        synchronizer: Optional[TeamDocSync] = None,
        docs_filename: str = "AGENTS.md",
    ) -> None:
        self._store = store
        self._sync = synchronizer or TeamDocSync(store, docs_filename=docs_filename)

    @property
    def store(self) -> SettingsStore:
        return self._store

    def _snapshot(self) -> Tuple[Dict[str, AgentRecord], Dict[str, TeamRecord]]:
        data = self._store.load()
        return (
            agents_from_settings(data.get("agents") or {}),
            teams_from_settings(data.get("teams") or {}),
        )

    def agents(self) -> Dict[str, AgentRecord]:
        return self._snapshot()[0]

    def list(self) -> List[TeamRecord]:
        return list(self._snapshot()[1].values())

    def get(self, team_id: str) -> TeamRecord:
        teams = self._snapshot()[1]
        team = teams.get(str(team_id or "").strip())
        if team is None:
            raise TeamNotFound(str(team_id), available=list(teams.keys()))
        return team

    def create(
        self,
        candidate_id: str,
        display_name: str = "",
        member_ids: Iterable[str] = (),
        leader_id: str = "",
    ) -> CreateResult:
        agents, teams = self._snapshot()

        team_id = normalize_id(candidate_id)
        ensure_available(team_id, agents, teams)

        members, skipped = self._resolve_members(member_ids, agents)
        if len(members) < MIN_TEAM_MEMBERS:
            raise InsufficientMembers(members, MIN_TEAM_MEMBERS)

        leader = normalize_agent_ref(leader_id) or members[0]
        if leader not in members:
            raise InvalidLeader(leader, members)

        team = TeamRecord(
            id=team_id,
            name=str(display_name or "").strip() or team_id,
            agents=members,
            leader_agent=leader,
        )
        self._store.set(("teams", team_id), team.to_settings())
        logger.info(f"Team '{team_id}' created with agents {members} (leader @{leader})")

        synced = self._sync_agents(members)
        return CreateResult(team=team, skipped=skipped, synced=synced)

    def delete(self, team_id: str, confirmed: Union[bool, str, None] = False) -> DeleteResult:
        team = self.get(team_id)
        if not is_confirmed(confirmed):
            logger.debug(f"Removal of team '{team.id}' cancelled")
            return DeleteResult(team_id=team.id, removed=False, cancelled=True)

        former_members = list(team.agents)
        self._store.delete(("teams", team.id))
        logger.info(f"Team '{team.id}' removed")

        synced = self._sync_agents(former_members)
        return DeleteResult(team_id=team.id, removed=True, former_members=former_members, synced=synced)

    def resync(self, agent_ids: Optional[Sequence[str]] = None) -> List[str]:
        """Re-run document sync for ``agent_ids`` (default: every agent)."""
        if agent_ids is None:
            agent_ids = list(self.agents().keys())
        return self._sync_agents(agent_ids)

    def _resolve_members(
        self, member_ids: Iterable[str], agents: Dict[str, Any]
    ) -> Tuple[List[str], List[str]]:
        members: List[str] = []
        skipped: List[str] = []
        for raw in member_ids:
            aid = normalize_agent_ref(raw)
            if not aid or aid in members:
                continue
            if aid in agents:
                members.append(aid)
            else:
                logger.warning(f"Agent '{aid}' not found, skipping.")
                if aid not in skipped:
                    skipped.append(aid)
        return members, skipped

    def _sync_agents(self, agent_ids: Iterable[str]) -> List[str]:
        """Sync each agent's docs; failures are logged, never raised."""
        updated: List[str] = []
        seen = set()
        for aid in agent_ids:
            if aid in seen:
                continue
            seen.add(aid)
            try:
                if self._sync.sync(aid):
                    updated.append(aid)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Team sync failed for agent '{aid}': {e}")
        return updated
