"""Dependency injection container for the study controller."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dependency_injector import containers, providers

from .core import CandidatePoolGenerator, SessionController
from .schemas import StudyConfig
from .storage import InMemoryStore, JsonFileStore
from .timing import SystemClock, ThreadingScheduler


class StudyContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    study_config = providers.Singleton(StudyConfig)

    clock = providers.Singleton(SystemClock)
    scheduler = providers.Singleton(ThreadingScheduler)
    record_store = providers.Singleton(InMemoryStore)

    pool_generator = providers.Singleton(
        CandidatePoolGenerator,
        config=study_config,
    )

    session_controller = providers.Factory(
        SessionController,
        config=study_config,
        generator=pool_generator,
        clock=clock,
        scheduler=scheduler,
        store=record_store,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> StudyContainer:
    """Instantiate container with optional overrides."""

    container = StudyContainer()

    if not settings:
        return container

    study_settings = settings.get("study", {}) if isinstance(settings, dict) else {}
    if study_settings:
        study_config = StudyConfig.model_validate(study_settings)
        container.study_config.override(providers.Object(study_config))

    storage_settings = settings.get("storage", {}) if isinstance(settings, dict) else {}
    store_path = storage_settings.get("path") if storage_settings else None
    if store_path:
        container.record_store.override(
            providers.Singleton(JsonFileStore, base_path=Path(store_path))
        )

    return container
