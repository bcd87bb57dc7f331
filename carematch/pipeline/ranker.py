"""Ranking queries: best professionals for a family, best families for a professional.

Data flow:
  1. Subject lookup (family or professional) - missing id raises ProfileNotFoundError
  2. Care recipient resolution (single lookup, or one bulk index)
  3. Opposing collection load
  4. Optional browse filters
  5. Score every pair
  6. Stable sort by score descending, truncate to limit
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from carematch.core.config import ScoringConfig, Settings
from carematch.core.errors import ProfileNotFoundError, ProfileStoreError
from carematch.core.schemas import (
    ROLE_FAMILY,
    ROLE_PROFESSIONAL,
    Family,
    FamilyMatch,
    MatchResult,
    Professional,
    ProfessionalMatch,
)
from carematch.matching.filters import Filter, run_filter_chain
from carematch.matching.scorer import score_match
from carematch.pipeline.lookup import fetch_care_recipient
from carematch.stores.base import ProfileStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", ProfessionalMatch, FamilyMatch)


async def score_pair(
    store: ProfileStore,
    family: Family,
    professional: Professional,
    config: ScoringConfig | None = None,
) -> MatchResult:
    """Score one pair, looking up the family's care recipient if not attached."""
    if family.care_recipient is None:
        family = family.with_care_recipient(await fetch_care_recipient(store, family.id))
    return score_match(family, professional, config)


async def matches_for_family(
    store: ProfileStore,
    family_id: str,
    *,
    limit: int | None = None,
    settings: Settings | None = None,
    filters: Sequence[Filter] = (),
) -> list[ProfessionalMatch]:
    """Rank professionals for a family.

    Raises:
        ProfileNotFoundError: No family-role profile has this id.
        ProfileStoreError: The family or professional collection could not be read.
    """
    settings = settings or Settings()
    limit = _resolve_limit(limit, settings)

    family = await _load_subject(store.get_family, family_id, ROLE_FAMILY)
    if family.care_recipient is None:
        family = family.with_care_recipient(await fetch_care_recipient(store, family.id))

    professionals = await _load_collection(store.list_professionals, ROLE_PROFESSIONAL)
    candidates = run_filter_chain(professionals, filters)
    logger.info(
        "Family %s: %d professionals loaded, %d after filters",
        family_id, len(professionals), len(candidates),
    )

    matches = []
    for professional in candidates:
        result = score_match(family, professional, settings.scoring)
        matches.append(ProfessionalMatch(
            professional=professional,
            match_score=result.match_score,
            match_details=result.match_details,
        ))
    return _rank(matches, limit)


async def matches_for_professional(
    store: ProfileStore,
    professional_id: str,
    *,
    limit: int | None = None,
    settings: Settings | None = None,
    filters: Sequence[Filter] = (),
) -> list[FamilyMatch]:
    """Rank families for a professional.

    Care recipients are bulk-loaded once and joined by owning user id. If
    the bulk read fails, each family's recipient is looked up individually
    with at most ``settings.ranking.max_concurrency`` reads in flight.

    Raises:
        ProfileNotFoundError: No professional-role profile has this id.
        ProfileStoreError: The professional or family collection could not be read.
    """
    settings = settings or Settings()
    limit = _resolve_limit(limit, settings)

    professional = await _load_subject(
        store.get_professional, professional_id, ROLE_PROFESSIONAL,
    )
    families = await _load_collection(store.list_families, ROLE_FAMILY)
    candidates = run_filter_chain(families, filters)
    logger.info(
        "Professional %s: %d families loaded, %d after filters",
        professional_id, len(families), len(candidates),
    )

    enriched = await _attach_care_recipients(store, candidates, settings.ranking.max_concurrency)

    matches = []
    for family in enriched:
        result = score_match(family, professional, settings.scoring)
        matches.append(FamilyMatch(
            family=family,
            match_score=result.match_score,
            match_details=result.match_details,
        ))
    return _rank(matches, limit)


def export_matches_json(matches: Sequence[ProfessionalMatch | FamilyMatch]) -> str:
    """Export ranked matches as a JSON string.

    Each entry is the matched profile's fields plus ``matchScore`` and
    ``matchDetails`` (camelCase sub-score keys).
    """
    data: list[dict[str, Any]] = []
    for m in matches:
        profile = m.professional if isinstance(m, ProfessionalMatch) else m.family
        entry = profile.model_dump()
        entry["matchScore"] = m.match_score
        entry["matchDetails"] = m.match_details.model_dump(by_alias=True)
        data.append(entry)
    return json.dumps(data, indent=2)


async def _load_subject(
    fetch: Callable[[str], Awaitable[T | None]],
    profile_id: str,
    role: str,
) -> T:
    try:
        subject = await fetch(profile_id)
    except ProfileStoreError:
        logger.error("Failed to fetch %s profile %s", role, profile_id, exc_info=True)
        raise
    if subject is None:
        logger.warning("No %s profile found with id %s", role, profile_id)
        raise ProfileNotFoundError(profile_id, role)
    return subject


async def _load_collection(fetch: Callable[[], Awaitable[list[T]]], role: str) -> list[T]:
    try:
        return await fetch()
    except ProfileStoreError:
        logger.error("Failed to fetch %s profiles", role, exc_info=True)
        raise


async def _attach_care_recipients(
    store: ProfileStore,
    families: list[Family],
    max_concurrency: int,
) -> list[Family]:
    pending = [f for f in families if f.care_recipient is None]
    if not pending:
        return families

    try:
        recipients = await store.list_care_recipients()
    except ProfileStoreError:
        logger.error(
            "Bulk care recipient fetch failed - falling back to %d individual lookups",
            len(pending),
            exc_info=True,
        )
        return await _attach_individually(store, families, max_concurrency)

    index = {r.user_id: r for r in recipients}
    return [
        f if f.care_recipient is not None else f.with_care_recipient(index.get(f.id))
        for f in families
    ]


async def _attach_individually(
    store: ProfileStore,
    families: list[Family],
    max_concurrency: int,
) -> list[Family]:
    semaphore = asyncio.Semaphore(max_concurrency)

    async def attach(family: Family) -> Family:
        if family.care_recipient is not None:
            return family
        async with semaphore:
            recipient = await fetch_care_recipient(store, family.id)
        return family.with_care_recipient(recipient)

    return list(await asyncio.gather(*(attach(f) for f in families)))


def _rank(matches: list[M], limit: int) -> list[M]:
    # list.sort is stable, so ties keep collection order
    matches.sort(key=lambda m: m.match_score, reverse=True)
    return matches[:limit]


def _resolve_limit(limit: int | None, settings: Settings) -> int:
    if limit is None:
        return settings.ranking.default_limit
    if limit < 0:
        msg = f"limit must not be negative, got {limit}"
        raise ValueError(msg)
    return limit
