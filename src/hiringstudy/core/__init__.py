"""Core study engine: candidate pool, state machine and session controller."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .controller import SessionController
from .pool import CandidatePoolGenerator
from .session import (
    STAGES,
    AcceptConsent,
    Effect,
    Hire,
    Intent,
    Reject,
    Restart,
    SessionState,
    Stage,
    StartGame,
    SubmitSurvey,
    Transition,
    new_session,
    transition,
    validate_survey,
)

__all__ = [
    "STAGES",
    "AcceptConsent",
    "CandidatePoolGenerator",
    "Effect",
    "Hire",
    "Intent",
    "Reject",
    "Restart",
    "SessionController",
    "SessionState",
    "Stage",
    "StartGame",
    "SubmitSurvey",
    "Transition",
    "new_session",
    "transition",
    "validate_survey",
]
