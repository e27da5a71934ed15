"""Session state machine for the hiring study.

``transition`` is a pure reducer: it takes the current ``SessionState`` and
an intent reported by the renderer and returns the next state together with
the side effects the owner must carry out. Intents that do not apply to the
current stage leave the state untouched and are reported as not accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Literal, Mapping, Union

from ..schemas import Candidate, Decision, DecisionOutcome, ParticipantData, SurveyConfig

Stage = Literal["consent", "survey", "instructions", "game", "completion"]
STAGES: tuple[Stage, ...] = ("consent", "survey", "instructions", "game", "completion")

EffectKind = Literal["start_view_timer", "cancel_view_timer", "persist_record"]

GENDER_REQUIRED = "Please select a gender"
AGE_REQUIRED = "Please select an age range"
UNKNOWN_OPTION = "Please choose one of the listed options"


@dataclass(frozen=True, slots=True)
class AcceptConsent:
    pass


@dataclass(frozen=True, slots=True)
class SubmitSurvey:
    gender: str
    age: str


@dataclass(frozen=True, slots=True)
class StartGame:
    pass


@dataclass(frozen=True, slots=True)
class Hire:
    pass


@dataclass(frozen=True, slots=True)
class Reject:
    pass


@dataclass(frozen=True, slots=True)
class Restart:
    """Begin a new session with a freshly generated pool."""

    pool: tuple[Candidate, ...]
    session_id: str


Intent = Union[AcceptConsent, SubmitSurvey, StartGame, Hire, Reject, Restart]


@dataclass(frozen=True, slots=True)
class Effect:
    kind: EffectKind


START_VIEW_TIMER = Effect("start_view_timer")
CANCEL_VIEW_TIMER = Effect("cancel_view_timer")
PERSIST_RECORD = Effect("persist_record")


@dataclass(frozen=True, slots=True)
class SessionState:
    """Working memory of one participant session."""

    session_id: str
    pool: tuple[Candidate, ...]
    total_hires: int
    hires_remaining: int
    stage: Stage = "consent"
    participant: ParticipantData = field(default_factory=ParticipantData)
    current_candidate_index: int = 0
    shown_at_ms: int | None = None
    errors: Mapping[str, str] = field(default_factory=dict)

    @property
    def total_candidates(self) -> int:
        return len(self.pool)

    @property
    def decisions(self) -> tuple[Decision, ...]:
        return self.participant.decisions

    @property
    def current_candidate(self) -> Candidate | None:
        if self.stage != "game":
            return None
        return self.pool[self.current_candidate_index]


@dataclass(frozen=True, slots=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()
    accepted: bool = True


def new_session(pool: tuple[Candidate, ...], total_hires: int, *, session_id: str) -> SessionState:
    if not pool:
        raise ValueError("Candidate pool must not be empty")
    if not 1 <= total_hires <= len(pool):
        raise ValueError(f"Hire quota {total_hires} must be between 1 and {len(pool)}")
    return SessionState(
        session_id=session_id,
        pool=tuple(pool),
        total_hires=total_hires,
        hires_remaining=total_hires,
    )


def validate_survey(
    gender: str,
    age: str,
    survey: SurveyConfig | None = None,
) -> dict[str, str]:
    """Return field-level error messages; an empty mapping means valid."""
    errors: dict[str, str] = {}
    checks = (
        ("gender", gender, GENDER_REQUIRED, survey.gender_options if survey else ()),
        ("age", age, AGE_REQUIRED, survey.age_options if survey else ()),
    )
    for name, value, required_message, options in checks:
        if not value:
            errors[name] = required_message
        elif options and value not in options:
            errors[name] = UNKNOWN_OPTION
    return errors


def transition(
    state: SessionState,
    intent: Intent,
    *,
    now_ms: int,
    survey: SurveyConfig | None = None,
) -> Transition:
    handler = _HANDLERS.get((state.stage, type(intent)))
    if handler is None:
        return _ignored(state)
    return handler(state, intent, now_ms, survey)


def _ignored(state: SessionState) -> Transition:
    return Transition(state=state, accepted=False)


def _accept_consent(state: SessionState, intent: Any, now_ms: int, survey: Any) -> Transition:
    participant = state.participant.model_copy(update={"start_time": now_ms})
    return Transition(replace(state, stage="survey", participant=participant))


def _submit_survey(
    state: SessionState,
    intent: SubmitSurvey,
    now_ms: int,
    survey: SurveyConfig | None,
) -> Transition:
    gender = (intent.gender or "").strip()
    age = (intent.age or "").strip()
    errors = validate_survey(gender, age, survey)
    if errors:
        return Transition(replace(state, errors=errors), accepted=False)
    participant = state.participant.model_copy(update={"gender": gender, "age": age})
    return Transition(replace(state, stage="instructions", participant=participant, errors={}))


def _start_game(state: SessionState, intent: Any, now_ms: int, survey: Any) -> Transition:
    next_state = replace(state, stage="game", current_candidate_index=0, shown_at_ms=now_ms)
    return Transition(next_state, (START_VIEW_TIMER,))


def _hire(state: SessionState, intent: Any, now_ms: int, survey: Any) -> Transition:
    if state.hires_remaining <= 0:
        return _ignored(state)
    return _decide(state, "hired", now_ms)


def _reject(state: SessionState, intent: Any, now_ms: int, survey: Any) -> Transition:
    return _decide(state, "rejected", now_ms)


def _decide(state: SessionState, outcome: DecisionOutcome, now_ms: int) -> Transition:
    index = state.current_candidate_index
    shown_at = state.shown_at_ms if state.shown_at_ms is not None else now_ms
    decision = Decision.from_candidate(
        state.pool[index],
        decision=outcome,
        view_time=max(0, now_ms - shown_at),
        time_stamp=now_ms,
    )
    participant = state.participant.with_decision(decision)
    hires_remaining = state.hires_remaining - (1 if outcome == "hired" else 0)

    reviewed = index + 1
    remaining = state.total_candidates - reviewed
    if outcome == "hired":
        finished = hires_remaining <= 0 or reviewed >= state.total_candidates
    else:
        # Stop once rejecting would leave fewer candidates than open hires.
        # This ends one candidate later than an inclusive `remaining <= hires_remaining` test.
        finished = reviewed >= state.total_candidates or remaining < hires_remaining

    if finished:
        next_state = replace(
            state,
            stage="completion",
            participant=participant,
            hires_remaining=hires_remaining,
            current_candidate_index=reviewed,
            shown_at_ms=None,
        )
        return Transition(next_state, (CANCEL_VIEW_TIMER, PERSIST_RECORD))

    next_state = replace(
        state,
        participant=participant,
        hires_remaining=hires_remaining,
        current_candidate_index=reviewed,
        shown_at_ms=now_ms,
    )
    return Transition(next_state, (START_VIEW_TIMER,))


def _restart(state: SessionState, intent: Restart, now_ms: int, survey: Any) -> Transition:
    fresh = new_session(intent.pool, state.total_hires, session_id=intent.session_id)
    return Transition(fresh, (CANCEL_VIEW_TIMER,))


_HANDLERS: dict[tuple[Stage, type], Callable[..., Transition]] = {
    ("consent", AcceptConsent): _accept_consent,
    ("survey", SubmitSurvey): _submit_survey,
    ("instructions", StartGame): _start_game,
    ("game", Hire): _hire,
    ("game", Reject): _reject,
    ("completion", Restart): _restart,
}
