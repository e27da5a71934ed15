from __future__ import annotations

import pytest
from pydantic import ValidationError

from hiringstudy.schemas import Candidate, Decision, ParticipantData


def build_candidate(**kwargs) -> Candidate:
    defaults = {
        "id": 1,
        "gender": "male",
        "professional_appearance": "low",
        "skills": 4,
        "experience": 3,
        "recommendations": 2,
        "image_url": "/images/cv1.jpg",
    }
    defaults.update(kwargs)
    return Candidate(**defaults)


def test_candidate_is_frozen():
    candidate = build_candidate()

    with pytest.raises(ValidationError):
        candidate.skills = 1  # type: ignore[misc]


def test_candidate_accepts_camel_case_aliases():
    candidate = Candidate.model_validate(
        {
            "id": 2,
            "gender": "female",
            "professionalAppearance": "high",
            "skills": 5,
            "experience": 2,
            "recommendations": 4,
            "imageUrl": "/images/cv2.jpg",
        }
    )

    assert candidate.professional_appearance == "high"
    assert candidate.model_dump(by_alias=True)["imageUrl"] == "/images/cv2.jpg"


def test_candidate_rejects_unknown_appearance():
    with pytest.raises(ValidationError):
        build_candidate(professional_appearance="dazzling")


def test_decision_copies_every_candidate_field():
    candidate = build_candidate(id=7, gender="female", professional_appearance="medium")

    decision = Decision.from_candidate(candidate, decision="hired", view_time=1500, time_stamp=99)

    for name in Candidate.model_fields:
        assert getattr(decision, name) == getattr(candidate, name)
    assert decision.decision == "hired"
    assert decision.view_time == 1500
    assert decision.time_stamp == 99
    assert decision.candidate() == candidate


def test_decision_rejects_negative_view_time():
    with pytest.raises(ValidationError):
        Decision.from_candidate(build_candidate(), decision="rejected", view_time=-1, time_stamp=0)


def test_participant_defaults_and_document():
    participant = ParticipantData()

    assert participant.gender == ""
    assert participant.age == ""
    assert participant.start_time is None
    assert participant.decisions == ()

    decision = Decision.from_candidate(build_candidate(), decision="hired", view_time=10, time_stamp=20)
    updated = participant.with_decision(decision)

    assert participant.decisions == ()
    assert updated.hire_count == 1
    document = updated.model_copy(update={"start_time": 5}).to_document()
    assert document["startTime"] == 5
    assert document["decisions"][0]["viewTime"] == 10
    assert document["decisions"][0]["professionalAppearance"] == "low"
