"""Candidate pool generation."""

from __future__ import annotations

import random

from ..schemas import Candidate, StudyConfig
from ..schemas.config import RatingRange


class CandidatePoolGenerator:
    """Build the ordered list of candidates shown during the game stage."""

    def __init__(
        self,
        *,
        config: StudyConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or StudyConfig()
        self._rng = rng or random.Random()

    @property
    def size(self) -> int:
        return self._config.total_candidates

    def generate(self, size: int | None = None) -> tuple[Candidate, ...]:
        count = self._config.total_candidates if size is None else size
        if count < 1:
            raise ValueError(f"Pool size must be at least 1, got {count}")
        return tuple(self._build(index) for index in range(count))

    def _build(self, index: int) -> Candidate:
        config = self._config
        ratings = config.ratings
        candidate_id = index + 1
        return Candidate(
            id=candidate_id,
            gender=config.gender_labels[index % 2],
            professional_appearance=config.appearance_cycle[index % len(config.appearance_cycle)],
            skills=self._draw(ratings.skills),
            experience=self._draw(ratings.experience),
            recommendations=self._draw(ratings.recommendations),
            image_url=config.image_url_template.format(id=candidate_id, index=index),
        )

    def _draw(self, bounds: RatingRange) -> int:
        return self._rng.randint(bounds.low, bounds.high)
