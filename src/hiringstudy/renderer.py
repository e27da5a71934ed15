"""Plain-terminal renderer that drives a ``SessionController``."""

from __future__ import annotations

from typing import Callable

import typer

from .core import SessionController
from .schemas import Candidate, SurveyConfig

MAX_STARS = 5


def render_stars(count: int, *, maximum: int = MAX_STARS) -> str:
    filled = max(0, min(count, maximum))
    return "★" * filled + "☆" * (maximum - filled)


class TerminalRenderer:
    """Show whatever the controller's stage dictates and forward intents.

    The renderer holds no session state of its own; every screen is drawn
    from controller properties.
    """

    def __init__(
        self,
        controller: SessionController,
        *,
        survey: SurveyConfig | None = None,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self._controller = controller
        self._survey = survey or SurveyConfig()
        self._echo = echo

    def run(self) -> None:
        screens = {
            "consent": self._consent,
            "survey": self._survey_form,
            "instructions": self._instructions,
            "game": self._candidate,
        }
        while True:
            stage = self._controller.stage
            if stage == "completion":
                self._completion()
                if not typer.confirm("Start a new session?", default=False):
                    return
                self._controller.restart()
                continue
            if not screens[stage]():
                return

    def _consent(self) -> bool:
        self._echo("")
        self._echo("Informed consent")
        self._echo("In this study you will:")
        self._echo("  - Complete a brief demographic questionnaire")
        self._echo("  - Participate in a simulated hiring task")
        self._echo("  - Evaluate a series of candidate profiles")
        if not typer.confirm("I agree to participate", default=True):
            self._echo("You did not consent. No data has been recorded.")
            return False
        self._controller.accept_consent()
        return True

    def _survey_form(self) -> bool:
        self._echo("")
        self._echo("Demographic survey")
        if self._survey.gender_options:
            self._echo(f"Gender options: {', '.join(self._survey.gender_options)}")
        gender = typer.prompt("Gender", default="", show_default=False)
        if self._survey.age_options:
            self._echo(f"Age ranges: {', '.join(self._survey.age_options)}")
        age = typer.prompt("Age range", default="", show_default=False)
        if not self._controller.submit_survey(gender, age):
            for field_name, message in self._controller.errors.items():
                self._echo(f"  {field_name}: {message}")
        return True

    def _instructions(self) -> bool:
        controller = self._controller
        self._echo("")
        self._echo("Instructions")
        self._echo(
            f"You will review up to {controller.total_candidates} candidate profiles "
            f"and must select {controller.total_hires} candidates to hire."
        )
        self._echo("Each profile shows skills, experience and recommendations ratings.")
        self._echo("Once you make a decision, you cannot go back.")
        typer.prompt("Press Enter to start", default="", show_default=False)
        controller.start_game()
        return True

    def _candidate(self) -> bool:
        controller = self._controller
        candidate = controller.current_candidate
        if candidate is None:
            return False
        self._echo("")
        self._echo(
            f"Candidate {controller.current_candidate_index + 1} of {controller.total_candidates}"
        )
        self._echo(self.describe(candidate))

        hire_open = controller.hires_remaining > 0
        hire_label = f"[h]ire ({controller.hires_remaining} left)" if hire_open else "hire (none left)"
        choice = typer.prompt(f"{hire_label} / [r]eject", default="", show_default=False)
        choice = choice.strip().lower()
        if choice in {"h", "hire"} and hire_open:
            controller.hire()
        elif choice in {"r", "reject"}:
            controller.reject()
        else:
            self._echo("Please enter 'h' to hire or 'r' to reject.")
            return True

        decisions = controller.decisions
        if decisions:
            self._echo(f"  Viewed for {decisions[-1].view_time / 1000:.1f}s")
        return True

    def _completion(self) -> None:
        controller = self._controller
        participant = controller.participant
        self._echo("")
        self._echo("Thank you for participating!")
        self._echo(
            f"You reviewed {len(participant.decisions)} candidates "
            f"and hired {participant.hire_count}."
        )
        if controller.persist_failed:
            self._echo("(Your responses could not be saved.)")

    @staticmethod
    def describe(candidate: Candidate) -> str:
        lines = [
            f"  Photo:           {candidate.image_url}",
            f"  Skills:          {render_stars(candidate.skills)}",
            f"  Experience:      {render_stars(candidate.experience)}",
            f"  Recommendations: {render_stars(candidate.recommendations)}",
        ]
        return "\n".join(lines)
