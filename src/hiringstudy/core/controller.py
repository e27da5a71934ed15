"""Session controller: owns the state machine, view timer and persistence hand-off."""

from __future__ import annotations

import uuid
from typing import Callable, Mapping

import structlog

from ..schemas import Candidate, Decision, ParticipantData, StudyConfig
from ..storage import RecordStore, build_record
from ..timing import Clock, Scheduler, ViewTimer
from .pool import CandidatePoolGenerator
from .session import (
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
    new_session,
    transition,
)


def _new_session_id() -> str:
    return uuid.uuid4().hex


class SessionController:
    """Single-participant session driven by renderer intents.

    Each intent method returns ``True`` when the intent changed the stage or
    recorded a decision and ``False`` when it was ignored or failed
    validation.
    """

    def __init__(
        self,
        *,
        config: StudyConfig,
        generator: CandidatePoolGenerator,
        clock: Clock,
        scheduler: Scheduler,
        store: RecordStore,
        session_id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._config = config
        self._generator = generator
        self._clock = clock
        self._store = store
        self._session_ids = session_id_factory or _new_session_id
        self._view_timer = ViewTimer(
            clock=clock,
            scheduler=scheduler,
            interval_ms=config.view_timer_interval_ms,
        )
        self._logger = structlog.get_logger(__name__)
        self._state = new_session(
            generator.generate(),
            config.total_hires,
            session_id=self._session_ids(),
        )
        self._persist_failed = False

    # Renderer -> core

    def accept_consent(self) -> bool:
        return self.dispatch(AcceptConsent())

    def submit_survey(self, gender: str, age: str) -> bool:
        return self.dispatch(SubmitSurvey(gender=gender, age=age))

    def start_game(self) -> bool:
        return self.dispatch(StartGame())

    def hire(self) -> bool:
        return self.dispatch(Hire())

    def reject(self) -> bool:
        return self.dispatch(Reject())

    def restart(self) -> bool:
        if self._state.stage != "completion":
            return self.dispatch(Restart(pool=self._state.pool, session_id=self._state.session_id))
        return self.dispatch(Restart(pool=self._generator.generate(), session_id=self._session_ids()))

    def dispatch(self, intent: Intent) -> bool:
        previous = self._state
        result = transition(
            previous,
            intent,
            now_ms=self._clock.now_ms(),
            survey=self._config.survey,
        )
        self._state = result.state
        if result.state.session_id != previous.session_id:
            self._persist_failed = False

        if not result.accepted:
            if result.state is not previous:
                self._logger.info(
                    "session.survey_invalid",
                    session_id=previous.session_id,
                    fields=sorted(result.state.errors),
                )
            else:
                self._logger.debug(
                    "session.intent_ignored",
                    session_id=previous.session_id,
                    stage=previous.stage,
                    intent=type(intent).__name__,
                    hires_remaining=previous.hires_remaining,
                )
            return False

        if len(result.state.decisions) > len(previous.decisions):
            latest = result.state.decisions[-1]
            self._logger.info(
                "session.decision_recorded",
                session_id=result.state.session_id,
                candidate_id=latest.id,
                decision=latest.decision,
                view_time=latest.view_time,
                hires_remaining=result.state.hires_remaining,
            )
        if result.state.stage != previous.stage:
            self._logger.info(
                "session.transition",
                session_id=result.state.session_id,
                from_stage=previous.stage,
                to_stage=result.state.stage,
            )

        for effect in result.effects:
            self._apply(effect)
        return True

    # Core -> renderer

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session_id(self) -> str:
        return self._state.session_id

    @property
    def stage(self) -> Stage:
        return self._state.stage

    @property
    def current_candidate(self) -> Candidate | None:
        return self._state.current_candidate

    @property
    def current_candidate_index(self) -> int:
        return self._state.current_candidate_index

    @property
    def hires_remaining(self) -> int:
        return self._state.hires_remaining

    @property
    def total_candidates(self) -> int:
        return self._state.total_candidates

    @property
    def total_hires(self) -> int:
        return self._state.total_hires

    @property
    def decisions(self) -> tuple[Decision, ...]:
        return self._state.decisions

    @property
    def participant(self) -> ParticipantData:
        return self._state.participant

    @property
    def errors(self) -> Mapping[str, str]:
        return dict(self._state.errors)

    @property
    def elapsed_ms(self) -> int:
        return self._view_timer.elapsed_ms

    @property
    def timer_running(self) -> bool:
        return self._view_timer.running

    @property
    def persist_failed(self) -> bool:
        return self._persist_failed

    def close(self) -> None:
        self._view_timer.cancel()

    def _apply(self, effect: Effect) -> None:
        if effect.kind == "start_view_timer":
            if self._state.shown_at_ms is not None:
                self._view_timer.start(self._state.shown_at_ms)
        elif effect.kind == "cancel_view_timer":
            self._view_timer.cancel()
        elif effect.kind == "persist_record":
            self._persist(self._state)

    def _persist(self, state: SessionState) -> None:
        document = build_record(
            state.participant,
            session_id=state.session_id,
            total_candidates=state.total_candidates,
            total_hires=state.total_hires,
        )
        try:
            self._store.put(state.session_id, document)
        except Exception as exc:  # noqa: BLE001
            self._persist_failed = True
            self._logger.error(
                "study.persist_failed",
                session_id=state.session_id,
                error=str(exc),
            )
            return
        self._logger.info(
            "study.persisted",
            session_id=state.session_id,
            decisions=len(state.decisions),
            hires=state.participant.hire_count,
        )
