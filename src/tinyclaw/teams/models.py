"""
Team models (Pydantic).

``AgentRecord`` and ``TeamRecord`` mirror the entries of the ``agents`` and
``teams`` mappings in settings.json. The mapping key is the id; it is carried
on the model at runtime and excluded when the record is written back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AgentRecord(BaseModel):
    # Agents belong to the agent registry; keep whatever else it stores.
    model_config = ConfigDict(extra="allow")

    id: str = Field(default="", exclude=True)
    name: str = ""
    working_directory: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("working_directory", mode="before")
    @classmethod
    def _coerce_workdir(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def workdir(self) -> Optional[Path]:
        wd = str(self.working_directory or "").strip()
        return Path(wd).expanduser() if wd else None


class TeamRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str = Field(default="", exclude=True)
    name: str = ""
    agents: List[str] = Field(default_factory=list)
    leader_agent: str = ""

    @field_validator("agents", mode="before")
    @classmethod
    def _coerce_agents(cls, v: Any) -> List[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [str(a) for a in v]

    @field_validator("name", "leader_agent", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    def has_member(self, agent_id: str) -> bool:
        return agent_id in self.agents

    def to_settings(self) -> Dict[str, Any]:
        """The JSON object stored under ``teams.<id>``."""
        return self.model_dump(mode="json")


def agents_from_settings(raw: Dict[str, Any]) -> Dict[str, AgentRecord]:
    return {
        str(aid): AgentRecord.model_validate({**(value if isinstance(value, dict) else {}), "id": str(aid)})
        for aid, value in raw.items()
    }


def teams_from_settings(raw: Dict[str, Any]) -> Dict[str, TeamRecord]:
    return {
        str(tid): TeamRecord.model_validate({**(value if isinstance(value, dict) else {}), "id": str(tid)})
        for tid, value in raw.items()
    }


@dataclass(frozen=True)
class CreateResult:
    team: TeamRecord
    skipped: List[str] = field(default_factory=list)
    synced: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DeleteResult:
    team_id: str
    removed: bool
    cancelled: bool = False
    former_members: List[str] = field(default_factory=list)
    synced: List[str] = field(default_factory=list)
