"""Candidate profiles and the decisions recorded against them."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Appearance = Literal["low", "medium", "high"]
DecisionOutcome = Literal["hired", "rejected"]


class Candidate(BaseModel):
    """Generated candidate shown to the participant.

    Identity and confound fields (``id``, ``gender``,
    ``professional_appearance``) depend only on the position in the pool;
    the three ratings are drawn once when the pool is created.
    """

    id: int = Field(ge=1)
    gender: str
    professional_appearance: Appearance = Field(alias="professionalAppearance")
    skills: int
    experience: int
    recommendations: int
    image_url: str = Field(alias="imageUrl")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class Decision(Candidate):
    """Snapshot of a candidate plus the participant's verdict."""

    decision: DecisionOutcome
    view_time: int = Field(ge=0, alias="viewTime")
    time_stamp: int = Field(alias="timeStamp")

    @classmethod
    def from_candidate(
        cls,
        candidate: Candidate,
        *,
        decision: DecisionOutcome,
        view_time: int,
        time_stamp: int,
    ) -> "Decision":
        return cls(
            **candidate.model_dump(),
            decision=decision,
            view_time=view_time,
            time_stamp=time_stamp,
        )

    def candidate(self) -> Candidate:
        """Return the candidate fields without the decision metadata."""
        return Candidate.model_validate(
            self.model_dump(exclude={"decision", "view_time", "time_stamp"})
        )
