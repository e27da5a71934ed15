"""Persistence of finished participant records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import pendulum

from . import __version__
from .schemas import ParticipantData


@runtime_checkable
class RecordStore(Protocol):
    """Key-value sink for finished session records."""

    def put(self, key: str, document: dict[str, Any]) -> None:
        """Store ``document`` under ``key``, replacing any previous value."""


class InMemoryStore:
    """Keep documents in a dict; used for demos and tests."""

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}

    def put(self, key: str, document: dict[str, Any]) -> None:
        self.documents[key] = json.loads(json.dumps(document, ensure_ascii=False))

    def get(self, key: str) -> dict[str, Any] | None:
        return self.documents.get(key)


class JsonFileStore:
    """Write each record to ``<base_path>/<key>.json``."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Invalid record key: {key!r}")
        return self._base_path / f"{key}.json"

    def put(self, key: str, document: dict[str, Any]) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(document, ensure_ascii=False, indent=2)
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(path)
        finally:
            tmp_path.unlink(missing_ok=True)


def build_record(
    participant: ParticipantData,
    *,
    session_id: str,
    total_candidates: int,
    total_hires: int,
) -> dict[str, Any]:
    """Assemble the structured document handed to a ``RecordStore``."""
    metadata = {
        "session_id": session_id,
        "saved_at": pendulum.now("UTC").to_iso8601_string(),
        "app_version": __version__,
        "total_candidates": total_candidates,
        "total_hires": total_hires,
    }
    return {
        "metadata": metadata,
        "participant": participant.to_document(),
    }


__all__ = ["InMemoryStore", "JsonFileStore", "RecordStore", "build_record"]
