"""Browse filters applied to the opposing profile collection before scoring.

Each filter is a callable taking a list of profiles and returning the
surviving subset in the original order. A filter built with an empty
selection passes everything through. Filters never change scores.

Filters that read professional-only fields (certifications, training,
experience, rate) pass family profiles through untouched.
"""

import logging
import re
from collections.abc import Callable, Sequence
from typing import TypeVar

from carematch.core.schemas import Family, Professional

logger = logging.getLogger(__name__)

ProfileT = TypeVar("ProfileT", Family, Professional)

# A filter is a callable that takes profiles and returns a subset.
Filter = Callable[[list[ProfileT]], list[ProfileT]]

_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _care_types(profile: Family | Professional) -> list[str]:
    if isinstance(profile, Professional):
        return profile.caregiving_areas
    return profile.care_types


def _special_needs(profile: Family | Professional) -> list[str]:
    if isinstance(profile, Professional):
        return profile.medical_conditions_experience
    return profile.special_needs


def _log_removed(name: str, before: int, after: int) -> None:
    if before != after:
        logger.debug("%s: removed %d profiles", name, before - after)


class CareTypesFilter:
    """Keep profiles offering or seeking at least one selected care type (exact match)."""

    def __init__(self, selected: Sequence[str]) -> None:
        self._selected = set(selected)

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        if not self._selected:
            return profiles
        result = [p for p in profiles if self._selected.intersection(_care_types(p))]
        _log_removed("CareTypesFilter", len(profiles), len(result))
        return result


class SpecialNeedsFilter:
    """Keep profiles sharing at least one selected special need / condition."""

    def __init__(self, selected: Sequence[str]) -> None:
        self._selected = set(selected)

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        if not self._selected:
            return profiles
        result = [p for p in profiles if self._selected.intersection(_special_needs(p))]
        _log_removed("SpecialNeedsFilter", len(profiles), len(result))
        return result


class ScheduleFilter:
    """Case-insensitive substring match on availability or care schedule.

    ``"all"`` (the browse default) and empty terms are no-ops.
    """

    def __init__(self, term: str | None) -> None:
        term = (term or "").strip().lower()
        self._term = "" if term == "all" else term

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        if not self._term:
            return profiles
        result = [p for p in profiles if self._matches(p)]
        _log_removed("ScheduleFilter", len(profiles), len(result))
        return result

    def _matches(self, profile: Family | Professional) -> bool:
        if isinstance(profile, Professional):
            return any(self._term in slot.lower() for slot in profile.availability)
        return self._term in (profile.care_schedule or "").lower()


class CertificationsFilter:
    """Keep professionals holding at least one of the required certifications."""

    def __init__(self, required: Sequence[str]) -> None:
        self._required = set(required)

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        if not self._required:
            return profiles
        result = [
            p for p in profiles
            if not isinstance(p, Professional) or self._required.intersection(p.certifications)
        ]
        _log_removed("CertificationsFilter", len(profiles), len(result))
        return result


class TrainedOnlyFilter:
    """Keep professionals flagged as trained or holding any certification."""

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        result = [
            p for p in profiles
            if not isinstance(p, Professional) or p.has_training or bool(p.certifications)
        ]
        _log_removed("TrainedOnlyFilter", len(profiles), len(result))
        return result


class MinimumExperienceFilter:
    """Keep professionals with at least ``years`` of experience.

    Experience text like "5+" or "5+ years" is read by its leading number;
    missing or unparseable experience counts as 0.
    """

    def __init__(self, years: int) -> None:
        self._years = years

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        if self._years <= 0:
            return profiles
        result = [
            p for p in profiles
            if not isinstance(p, Professional)
            or parse_experience_years(p.years_of_experience) >= self._years
        ]
        _log_removed("MinimumExperienceFilter", len(profiles), len(result))
        return result


class HourlyRateFilter:
    """Keep professionals whose hourly rate range overlaps [low, high]."""

    def __init__(self, low: float, high: float) -> None:
        if low > high:
            msg = f"low must not exceed high, got {low} > {high}"
            raise ValueError(msg)
        self._low = low
        self._high = high

    def __call__(self, profiles: list[ProfileT]) -> list[ProfileT]:
        result = [p for p in profiles if not isinstance(p, Professional) or self._overlaps(p)]
        _log_removed("HourlyRateFilter", len(profiles), len(result))
        return result

    def _overlaps(self, professional: Professional) -> bool:
        rate_low, rate_high = parse_rate_range(professional.hourly_rate)
        return rate_low <= self._high and rate_high >= self._low


def parse_experience_years(text: str | None) -> int:
    """Leading whole number in an experience string ("5+ years" -> 5), else 0."""
    if not text:
        return 0
    match = _NUMBER.search(text)
    return int(float(match.group(0))) if match else 0


def parse_rate_range(text: str | None) -> tuple[float, float]:
    """Parse "$18-25", "$25-30/hour" or "$20" into (low, high). Missing -> (0, 0)."""
    if not text:
        return (0.0, 0.0)
    numbers = [float(n) for n in _NUMBER.findall(text)]
    if not numbers:
        return (0.0, 0.0)
    low = numbers[0]
    high = numbers[1] if len(numbers) > 1 else low
    return (low, high)


def run_filter_chain(profiles: list[ProfileT], filters: Sequence[Filter]) -> list[ProfileT]:
    """Apply filters in order, returning the surviving profiles."""
    result = profiles
    for f in filters:
        result = f(result)
    return result
