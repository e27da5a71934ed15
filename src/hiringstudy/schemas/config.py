"""Pydantic configuration schema for the study and its YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .candidate import Appearance

DEFAULT_GENDER_OPTIONS = (
    "male",
    "female",
    "non-binary",
    "other",
    "prefer-not-to-say",
)
DEFAULT_AGE_OPTIONS = (
    "18-24",
    "25-34",
    "35-44",
    "45-54",
    "55-64",
    "65+",
    "prefer-not-to-say",
)


class RatingRange(BaseModel):
    """Inclusive integer range a rating is drawn from."""

    low: int
    high: int

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "RatingRange":
        if self.high < self.low:
            raise ValueError(f"rating range is empty: {self.low}..{self.high}")
        return self


class RatingsConfig(BaseModel):
    skills: RatingRange = RatingRange(low=3, high=5)
    experience: RatingRange = RatingRange(low=2, high=4)
    recommendations: RatingRange = RatingRange(low=2, high=4)

    model_config = ConfigDict(extra="forbid", frozen=True)


class SurveyConfig(BaseModel):
    """Accepted survey answers. An empty option set accepts any value."""

    gender_options: tuple[str, ...] = DEFAULT_GENDER_OPTIONS
    age_options: tuple[str, ...] = DEFAULT_AGE_OPTIONS

    model_config = ConfigDict(extra="forbid", frozen=True)


class StudyConfig(BaseModel):
    """Constants fixed for the lifetime of a study process."""

    total_candidates: int = Field(default=12, ge=1)
    total_hires: int = Field(default=4, ge=1)
    view_timer_interval_ms: int = Field(default=100, ge=1)
    ratings: RatingsConfig = Field(default_factory=RatingsConfig)
    gender_labels: tuple[str, str] = ("male", "female")
    appearance_cycle: tuple[Appearance, ...] = ("low", "medium", "high")
    image_url_template: str = "/images/cv{id}.jpg"
    survey: SurveyConfig = Field(default_factory=SurveyConfig)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_quota(self) -> "StudyConfig":
        if self.total_hires > self.total_candidates:
            raise ValueError(
                f"total_hires ({self.total_hires}) exceeds total_candidates ({self.total_candidates})"
            )
        if not self.appearance_cycle:
            raise ValueError("appearance_cycle must not be empty")
        return self


class StorageConfig(BaseModel):
    path: str | None = "records"

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    study: StudyConfig = Field(default_factory=StudyConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "study": self.study.model_dump(mode="python"),
        }
        storage_settings = self.storage.model_dump(exclude_none=True)
        if storage_settings:
            settings["storage"] = storage_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    return AppConfig.model_validate(raw or {})
