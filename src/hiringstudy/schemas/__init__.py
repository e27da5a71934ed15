"""Pydantic schema definitions for study data structures."""

from __future__ import annotations

from .candidate import Appearance, Candidate, Decision, DecisionOutcome
from .config import (
    AppConfig,
    RatingRange,
    RatingsConfig,
    StorageConfig,
    StudyConfig,
    SurveyConfig,
)
from .participant import ParticipantData

__all__ = [
    "Appearance",
    "AppConfig",
    "Candidate",
    "Decision",
    "DecisionOutcome",
    "ParticipantData",
    "RatingRange",
    "RatingsConfig",
    "StorageConfig",
    "StudyConfig",
    "SurveyConfig",
]
