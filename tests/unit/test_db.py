"""Tests for the database layer: init, upsert, lookups by role, list ordering."""

import pytest

from carematch.core.db import (
    get_care_recipient,
    get_family,
    get_professional,
    init_db,
    list_care_recipients,
    list_families,
    list_professionals,
    upsert_care_recipient,
    upsert_family,
    upsert_professional,
)
from carematch.core.schemas import CareRecipient, Family, Professional


@pytest.fixture()
def db(tmp_path):  # type: ignore[no-untyped-def]
    """Provide a fresh SQLite connection per test."""
    conn = init_db(tmp_path / "test.db")
    yield conn
    conn.close()


class TestInitDb:
    def test_creates_tables(self, db) -> None:  # type: ignore[no-untyped-def]
        tables = {
            row[0]
            for row in db.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            ).fetchall()
        }
        assert "profiles" in tables
        assert "care_recipient_profiles" in tables

    def test_idempotent(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """Calling init_db twice on the same path doesn't error."""
        p = tmp_path / "double.db"
        conn1 = init_db(p)
        conn1.close()
        conn2 = init_db(p)
        conn2.close()

    def test_creates_parent_dirs(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        conn = init_db(tmp_path / "nested" / "dir" / "care.db")
        conn.close()
        assert (tmp_path / "nested" / "dir" / "care.db").exists()


class TestFamilies:
    def test_round_trip(self, db) -> None:  # type: ignore[no-untyped-def]
        family = Family(
            id="fam-1",
            full_name="Thomas Family",
            care_types=["Elderly Care"],
            special_needs=["Alzheimer's"],
            location="Port of Spain",
            care_schedule="Weekdays",
        )
        upsert_family(db, family)
        assert get_family(db, "fam-1") == family

    def test_missing_returns_none(self, db) -> None:  # type: ignore[no-untyped-def]
        assert get_family(db, "nope") is None

    def test_attached_recipient_not_stored(self, db) -> None:  # type: ignore[no-untyped-def]
        family = Family(id="fam-1", care_recipient=CareRecipient(user_id="fam-1"))
        upsert_family(db, family)
        stored = get_family(db, "fam-1")
        assert stored is not None
        assert stored.care_recipient is None
        assert get_care_recipient(db, "fam-1") is None

    def test_upsert_replaces(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_family(db, Family(id="fam-1", location="Arima"))
        upsert_family(db, Family(id="fam-1", location="Chaguanas"))
        stored = get_family(db, "fam-1")
        assert stored is not None
        assert stored.location == "Chaguanas"
        assert len(list_families(db)) == 1


class TestProfessionals:
    def test_round_trip(self, db) -> None:  # type: ignore[no-untyped-def]
        professional = Professional(
            id="pro-1",
            full_name="Sarah Johnson",
            caregiving_areas=["Elderly Care", "Medical Support"],
            medical_conditions_experience=["Diabetes Management"],
            location="Port of Spain",
            availability=["Weekdays", "Evenings"],
            bio="Registered nurse",
            years_of_experience="5+ years",
            languages=["English", "Spanish"],
            certifications=["CPR Certified"],
            hourly_rate="$25-30/hour",
            has_training=True,
        )
        upsert_professional(db, professional)
        assert get_professional(db, "pro-1") == professional

    def test_training_flag_false_by_default(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_professional(db, Professional(id="pro-1"))
        stored = get_professional(db, "pro-1")
        assert stored is not None
        assert stored.has_training is False


class TestRoleSeparation:
    def test_lookup_respects_role(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_family(db, Family(id="shared"))
        assert get_family(db, "shared") is not None
        assert get_professional(db, "shared") is None

    def test_lists_filtered_by_role(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_family(db, Family(id="fam-1"))
        upsert_professional(db, Professional(id="pro-1"))
        upsert_family(db, Family(id="fam-2"))
        assert [f.id for f in list_families(db)] == ["fam-1", "fam-2"]
        assert [p.id for p in list_professionals(db)] == ["pro-1"]

    def test_empty_lists(self, db) -> None:  # type: ignore[no-untyped-def]
        assert list_families(db) == []
        assert list_professionals(db) == []
        assert list_care_recipients(db) == []


class TestCareRecipients:
    def test_round_trip(self, db) -> None:  # type: ignore[no-untyped-def]
        recipient = CareRecipient(
            user_id="fam-1",
            full_name="Martha Thomas",
            birth_year="1941",
            caregiver_personality=["Patient"],
            hobbies_interests=["Reading"],
            cultural_preferences="Hindu traditions",
            challenges=["Diabetes Management"],
            life_story="Retired teacher",
        )
        upsert_care_recipient(db, recipient)
        assert get_care_recipient(db, "fam-1") == recipient

    def test_one_per_owner(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_care_recipient(db, CareRecipient(user_id="fam-1", full_name="First"))
        upsert_care_recipient(db, CareRecipient(user_id="fam-1", full_name="Second"))
        recipients = list_care_recipients(db)
        assert len(recipients) == 1
        assert recipients[0].full_name == "Second"

    def test_list_in_insertion_order(self, db) -> None:  # type: ignore[no-untyped-def]
        upsert_care_recipient(db, CareRecipient(user_id="fam-2"))
        upsert_care_recipient(db, CareRecipient(user_id="fam-1"))
        assert [r.user_id for r in list_care_recipients(db)] == ["fam-2", "fam-1"]
