"""Configuration models and YAML loader for the care matching engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

MAX_TOTAL_SCORE = 100.0


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/carematch.db"


class ScoringConfig(BaseModel):
    """Weights for the eight match dimensions.

    Defaults reproduce the published weighting (sum = 100). The personality
    weight is split evenly: half for stated caregiver-personality
    requirements, half when the professional has written a bio.
    """

    care_types_weight: float = Field(default=25.0, ge=0.0)
    special_needs_weight: float = Field(default=15.0, ge=0.0)
    location_weight: float = Field(default=10.0, ge=0.0)
    availability_weight: float = Field(default=10.0, ge=0.0)
    personality_weight: float = Field(default=15.0, ge=0.0)
    interests_weight: float = Field(default=10.0, ge=0.0)
    cultural_weight: float = Field(default=10.0, ge=0.0)
    experience_weight: float = Field(default=5.0, ge=0.0)

    @model_validator(mode="after")
    def total_within_bounds(self) -> "ScoringConfig":
        if self.total_weight > MAX_TOTAL_SCORE:
            msg = f"scoring weights must sum to at most {MAX_TOTAL_SCORE:g}, got {self.total_weight:g}"
            raise ValueError(msg)
        return self

    @property
    def total_weight(self) -> float:
        return (
            self.care_types_weight
            + self.special_needs_weight
            + self.location_weight
            + self.availability_weight
            + self.personality_weight
            + self.interests_weight
            + self.cultural_weight
            + self.experience_weight
        )


class RankingConfig(BaseModel):
    """Ranking query limits."""

    default_limit: int = Field(default=10, ge=1)
    max_concurrency: int = Field(default=8, ge=1, le=64)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
