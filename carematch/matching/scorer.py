"""Rule-based match scoring between a family and a professional.

Score range: 0-100. Eight additive dimensions weighted by ScoringConfig:

  care types      overlap ratio vs. family care types (capped at 1.0)
  special needs   overlap ratio vs. family special needs (capped at 1.0)
  location        exact string equality (both sides present)
  availability    family schedule present and professional lists availability
  personality     half for stated caregiver-personality wishes, half if bio
  interests       recipient hobbies present and professional states experience
  cultural        recipient cultural preferences present and professional languages
  experience      recipient challenges share an entry with professional experience

The last four need the family's CareRecipient and score zero without it.
All string comparisons are exact and case-sensitive.
"""

import logging

from carematch.core.config import ScoringConfig
from carematch.core.schemas import (
    CareRecipient,
    Family,
    MatchDetails,
    MatchResult,
    Professional,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ScoringConfig()


def score_match(
    family: Family,
    professional: Professional,
    config: ScoringConfig | None = None,
) -> MatchResult:
    """Score a single family/professional pair.

    Uses ``family.care_recipient`` as attached; callers that need the
    recipient looked up go through the ranking pipeline.

    Args:
        family: The care-seeking profile.
        professional: The care-providing profile.
        config: Dimension weights. Defaults to the standard weighting.

    Returns:
        MatchResult whose match_score is the sum of its details.
    """
    config = config or _DEFAULT_CONFIG
    recipient = family.care_recipient

    details = MatchDetails(
        care_types_match=_overlap_score(
            family.care_types, professional.caregiving_areas, config.care_types_weight,
        ),
        special_needs_match=_overlap_score(
            family.special_needs,
            professional.medical_conditions_experience,
            config.special_needs_weight,
        ),
        location_match=(
            config.location_weight
            if family.location and family.location == professional.location
            else 0.0
        ),
        availability=(
            config.availability_weight
            if family.care_schedule and professional.availability
            else 0.0
        ),
        personality_match=_personality_score(recipient, professional, config.personality_weight),
        interests_match=(
            config.interests_weight
            if recipient and recipient.hobbies_interests and professional.years_of_experience
            else 0.0
        ),
        cultural_match=(
            config.cultural_weight
            if recipient and recipient.cultural_preferences and professional.languages
            else 0.0
        ),
        experience_match=_challenge_score(recipient, professional, config.experience_weight),
    )

    logger.debug(
        "Scored family %s vs professional %s: %.2f", family.id, professional.id, details.total,
    )
    return MatchResult(
        professional_id=professional.id,
        family_id=family.id,
        match_score=details.total,
        match_details=details,
    )


def _overlap_score(wanted: list[str], offered: list[str], weight: float) -> float:
    """Share of ``wanted`` entries present in ``offered``, capped at 1.0, times weight."""
    if not wanted or not offered:
        return 0.0
    matching = [item for item in wanted if item in offered]
    return min(len(matching) / len(wanted), 1.0) * weight


def _personality_score(
    recipient: CareRecipient | None,
    professional: Professional,
    weight: float,
) -> float:
    if recipient is None or not recipient.caregiver_personality:
        return 0.0
    half = weight / 2
    return half + half if professional.bio else half


def _challenge_score(
    recipient: CareRecipient | None,
    professional: Professional,
    weight: float,
) -> float:
    if recipient is None or not recipient.challenges:
        return 0.0
    experience = professional.medical_conditions_experience
    if any(challenge in experience for challenge in recipient.challenges):
        return weight
    return 0.0
