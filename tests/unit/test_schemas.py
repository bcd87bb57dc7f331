"""Tests for core schemas: profiles, match details, match results."""

import pytest
from pydantic import ValidationError

from carematch.core.schemas import (
    CareRecipient,
    Family,
    MatchDetails,
    MatchResult,
    Professional,
)


class TestFamily:
    def test_create_with_id_only(self) -> None:
        f = Family(id="fam-1")
        assert f.care_types == []
        assert f.special_needs == []
        assert f.location is None
        assert f.care_schedule is None
        assert f.care_recipient is None

    def test_null_lists_become_empty(self) -> None:
        f = Family(id="fam-1", care_types=None, special_needs=None)
        assert f.care_types == []
        assert f.special_needs == []

    def test_unknown_fields_ignored(self) -> None:
        f = Family.model_validate({"id": "fam-1", "role": "family", "avatar_url": "x.png"})
        assert f.id == "fam-1"

    def test_frozen_model(self) -> None:
        f = Family(id="fam-1")
        with pytest.raises(ValidationError):
            f.location = "Arima"  # type: ignore[misc]

    def test_with_care_recipient_returns_copy(self) -> None:
        f = Family(id="fam-1")
        recipient = CareRecipient(user_id="fam-1", full_name="Martha")
        attached = f.with_care_recipient(recipient)
        assert attached.care_recipient == recipient
        assert f.care_recipient is None


class TestProfessional:
    def test_defaults(self) -> None:
        p = Professional(id="pro-1")
        assert p.caregiving_areas == []
        assert p.medical_conditions_experience == []
        assert p.availability == []
        assert p.languages == []
        assert p.bio is None
        assert p.years_of_experience is None
        assert p.has_training is False

    def test_numeric_experience_becomes_text(self) -> None:
        p = Professional(id="pro-1", years_of_experience=5)
        assert p.years_of_experience == "5"

    def test_numeric_zero_experience_is_absent(self) -> None:
        p = Professional(id="pro-1", years_of_experience=0)
        assert p.years_of_experience is None

    def test_numeric_id_and_rate_become_text(self) -> None:
        p = Professional.model_validate({"id": 42, "hourly_rate": 20})
        assert p.id == "42"
        assert p.hourly_rate == "20"

    def test_null_training_is_false(self) -> None:
        p = Professional.model_validate({"id": "pro-1", "has_training": None})
        assert p.has_training is False

    def test_null_lists_become_empty(self) -> None:
        p = Professional.model_validate({"id": "pro-1", "languages": None, "availability": None})
        assert p.languages == []
        assert p.availability == []


class TestCareRecipient:
    def test_user_id_required(self) -> None:
        with pytest.raises(ValidationError):
            CareRecipient()  # type: ignore[call-arg]

    def test_null_lists_become_empty(self) -> None:
        r = CareRecipient.model_validate({"user_id": "fam-1", "challenges": None})
        assert r.challenges == []
        assert r.cultural_preferences is None

    def test_numeric_fields_become_text(self) -> None:
        r = CareRecipient.model_validate({"user_id": 101, "id": 7, "birth_year": 1941})
        assert r.user_id == "101"
        assert r.id == "7"
        assert r.birth_year == "1941"


class TestMatchDetails:
    def test_total_sums_all_dimensions(self) -> None:
        d = MatchDetails(
            care_types_match=12.5,
            special_needs_match=15.0,
            location_match=10.0,
            availability=10.0,
            personality_match=15.0,
            interests_match=10.0,
            cultural_match=10.0,
            experience_match=5.0,
        )
        assert d.total == 87.5

    def test_camel_case_dump(self) -> None:
        dumped = MatchDetails().model_dump(by_alias=True)
        assert set(dumped) == {
            "careTypesMatch",
            "specialNeedsMatch",
            "locationMatch",
            "availability",
            "personalityMatch",
            "interestsMatch",
            "culturalMatch",
            "experienceMatch",
        }

    def test_accepts_camel_case_input(self) -> None:
        d = MatchDetails.model_validate({"careTypesMatch": 25.0})
        assert d.care_types_match == 25.0


class TestMatchResult:
    def test_score_above_100_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchResult(
                professional_id="p", family_id="f", match_score=100.5,
                match_details=MatchDetails(),
            )

    def test_negative_score_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MatchResult(
                professional_id="p", family_id="f", match_score=-1.0,
                match_details=MatchDetails(),
            )

    def test_camel_case_keys(self) -> None:
        r = MatchResult(
            professional_id="p", family_id="f", match_score=0.0, match_details=MatchDetails(),
        )
        dumped = r.model_dump(by_alias=True)
        assert dumped["professionalId"] == "p"
        assert dumped["familyId"] == "f"
        assert dumped["matchScore"] == 0.0
        assert "matchDetails" in dumped
