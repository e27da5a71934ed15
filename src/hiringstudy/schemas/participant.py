"""Participant record accumulated over a session."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .candidate import Decision


class ParticipantData(BaseModel):
    """Survey answers, start time and the ordered decision ledger."""

    gender: str = ""
    age: str = ""
    start_time: int | None = Field(default=None, alias="startTime")
    decisions: tuple[Decision, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @property
    def hire_count(self) -> int:
        return sum(1 for entry in self.decisions if entry.decision == "hired")

    def with_decision(self, decision: Decision) -> "ParticipantData":
        return self.model_copy(update={"decisions": self.decisions + (decision,)})

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
