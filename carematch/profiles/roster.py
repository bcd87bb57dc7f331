"""Roster model for bulk-loading profiles from YAML into the SQLite store."""

import logging
import sqlite3
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from carematch.core.db import upsert_care_recipient, upsert_family, upsert_professional
from carematch.core.schemas import CareRecipient, Family, Professional

logger = logging.getLogger(__name__)


class Roster(BaseModel):
    """Families, professionals, and care recipients to import.

    A family entry may nest its ``care_recipient``; nested recipients are
    stored alongside the top-level ``care_recipients`` list.
    """

    families: list[Family] = Field(default_factory=list)
    professionals: list[Professional] = Field(default_factory=list)
    care_recipients: list[CareRecipient] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_profile_ids(self) -> "Roster":
        ids = [f.id for f in self.families] + [p.id for p in self.professionals]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            msg = f"profile ids must be unique across families and professionals: {duplicates}"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def nested_recipient_owned_by_family(self) -> "Roster":
        for family in self.families:
            recipient = family.care_recipient
            if recipient is not None and recipient.user_id != family.id:
                msg = (
                    f"care recipient nested under family '{family.id}' "
                    f"has user_id '{recipient.user_id}'"
                )
                raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def unique_care_recipient_owners(self) -> "Roster":
        owners = [r.user_id for r in self.all_care_recipients()]
        duplicates = sorted({o for o in owners if owners.count(o) > 1})
        if duplicates:
            msg = f"each family may own at most one care recipient: {duplicates}"
            raise ValueError(msg)
        return self

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Roster":
        """Load a roster from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Roster file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    def all_care_recipients(self) -> list[CareRecipient]:
        nested = [f.care_recipient for f in self.families if f.care_recipient is not None]
        return nested + list(self.care_recipients)


def import_roster(conn: sqlite3.Connection, roster: Roster) -> dict[str, int]:
    """Upsert every roster entry into the database.

    Returns:
        Counts keyed by "families", "professionals", "care_recipients".
    """
    for family in roster.families:
        upsert_family(conn, family)
    for professional in roster.professionals:
        upsert_professional(conn, professional)
    recipients = roster.all_care_recipients()
    for recipient in recipients:
        upsert_care_recipient(conn, recipient)

    counts = {
        "families": len(roster.families),
        "professionals": len(roster.professionals),
        "care_recipients": len(recipients),
    }
    logger.info(
        "Imported %d families, %d professionals, %d care recipients",
        counts["families"], counts["professionals"], counts["care_recipients"],
    )
    return counts
