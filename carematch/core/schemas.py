"""Core data models for the care matching engine."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ROLE_FAMILY = "family"
ROLE_PROFESSIONAL = "professional"


def _none_to_list(v: Any) -> Any:
    return [] if v is None else v


def _number_to_str(v: Any) -> Any:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return str(v)
    return v


class CareRecipient(BaseModel):
    """Detailed profile of the person receiving care, owned by a family user.

    Only the list/preference fields take part in scoring; the narrative
    fields are carried for display.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str
    id: str = ""
    full_name: str = ""
    birth_year: str = ""
    personality_traits: list[str] = Field(default_factory=list)
    hobbies_interests: list[str] = Field(default_factory=list)
    career_fields: list[str] = Field(default_factory=list)
    caregiver_personality: list[str] = Field(default_factory=list)
    cultural_preferences: str | None = None
    challenges: list[str] = Field(default_factory=list)
    life_story: str | None = None
    unique_facts: str | None = None
    joyful_things: str | None = None
    daily_routines: str | None = None

    @field_validator(
        "personality_traits",
        "hobbies_interests",
        "career_fields",
        "caregiver_personality",
        "challenges",
        mode="before",
    )
    @classmethod
    def null_lists_empty(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("user_id", "id", "birth_year", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _number_to_str(v)


class Family(BaseModel):
    """A care-seeking household profile.

    Frozen. A linked CareRecipient may be attached by the ranking queries;
    when absent the scorer treats the four recipient dimensions as zero.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    full_name: str = ""
    care_types: list[str] = Field(default_factory=list)
    special_needs: list[str] = Field(default_factory=list)
    location: str | None = None
    care_schedule: str | None = None
    care_recipient: CareRecipient | None = None

    @field_validator("care_types", "special_needs", mode="before")
    @classmethod
    def null_lists_empty(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v: Any) -> Any:
        return _number_to_str(v)

    def with_care_recipient(self, care_recipient: CareRecipient | None) -> "Family":
        """Return a copy with the given care recipient attached."""
        return self.model_copy(update={"care_recipient": care_recipient})


class Professional(BaseModel):
    """A care-providing profile."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    full_name: str = ""
    caregiving_areas: list[str] = Field(default_factory=list)
    medical_conditions_experience: list[str] = Field(default_factory=list)
    location: str | None = None
    availability: list[str] = Field(default_factory=list)
    bio: str | None = None
    years_of_experience: str | None = None
    languages: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    hourly_rate: str | None = None
    has_training: bool = False

    @field_validator(
        "caregiving_areas",
        "medical_conditions_experience",
        "availability",
        "languages",
        "certifications",
        mode="before",
    )
    @classmethod
    def null_lists_empty(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def experience_as_text(cls, v: Any) -> Any:
        # Numeric zero is "no experience stated", like an empty string.
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v == 0:
            return None
        return _number_to_str(v)

    @field_validator("id", "hourly_rate", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        return _number_to_str(v)

    @field_validator("has_training", mode="before")
    @classmethod
    def null_training_false(cls, v: Any) -> Any:
        return False if v is None else v


class MatchDetails(BaseModel):
    """Per-dimension sub-scores. Serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    care_types_match: float = 0.0
    special_needs_match: float = 0.0
    location_match: float = 0.0
    availability: float = 0.0
    personality_match: float = 0.0
    interests_match: float = 0.0
    cultural_match: float = 0.0
    experience_match: float = 0.0

    @property
    def total(self) -> float:
        return (
            self.care_types_match
            + self.special_needs_match
            + self.location_match
            + self.availability
            + self.personality_match
            + self.interests_match
            + self.cultural_match
            + self.experience_match
        )


class MatchResult(BaseModel):
    """Score for one (family, professional) pair. Never persisted."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    professional_id: str
    family_id: str
    match_score: float = Field(ge=0.0, le=100.0)
    match_details: MatchDetails


class ProfessionalMatch(BaseModel):
    """A professional ranked for a family."""

    model_config = ConfigDict(frozen=True)

    professional: Professional
    match_score: float
    match_details: MatchDetails


class FamilyMatch(BaseModel):
    """A family ranked for a professional."""

    model_config = ConfigDict(frozen=True)

    family: Family
    match_score: float
    match_details: MatchDetails
