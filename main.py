"""CLI entry point for the care matching engine."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from carematch.core.config import Settings
from carematch.core.db import init_db
from carematch.core.errors import CareMatchError, ProfileNotFoundError
from carematch.core.schemas import ROLE_FAMILY, ROLE_PROFESSIONAL, FamilyMatch, ProfessionalMatch
from carematch.matching.filters import (
    CareTypesFilter,
    CertificationsFilter,
    Filter,
    HourlyRateFilter,
    MinimumExperienceFilter,
    ScheduleFilter,
    SpecialNeedsFilter,
    TrainedOnlyFilter,
)
from carematch.pipeline.ranker import (
    export_matches_json,
    matches_for_family,
    matches_for_professional,
    score_pair,
)
from carematch.profiles.roster import Roster, import_roster
from carematch.stores.sqlite_store import SqliteProfileStore

DEFAULT_CONFIG_PATH = "config/settings.yaml"

logger = logging.getLogger(__name__)


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def _add_ranking_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--limit", "-n",
        type=int,
        default=None,
        help="Maximum number of matches to return (default: ranking.default_limit)",
    )
    parser.add_argument(
        "--care-type",
        action="append",
        default=[],
        help="Only consider profiles with this care type (repeatable)",
    )
    parser.add_argument(
        "--special-need",
        action="append",
        default=[],
        help="Only consider profiles with this special need / condition (repeatable)",
    )
    parser.add_argument(
        "--schedule",
        default=None,
        help="Only consider profiles whose availability mentions this term",
    )
    parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Care matching engine - rank caregivers and families by compatibility",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- import-profiles subcommand ---
    import_parser = subparsers.add_parser(
        "import-profiles",
        help="Load families, professionals, and care recipients from a roster YAML",
    )
    import_parser.add_argument(
        "--roster",
        required=True,
        help="Path to roster YAML file",
    )
    _add_common_args(import_parser)

    # --- family-matches subcommand ---
    family_parser = subparsers.add_parser(
        "family-matches",
        help="Rank professionals for a family",
    )
    family_parser.add_argument("family_id", help="Family profile id")
    _add_ranking_args(family_parser)
    family_parser.add_argument(
        "--certification",
        action="append",
        default=[],
        help="Only consider professionals holding this certification (repeatable)",
    )
    family_parser.add_argument(
        "--trained-only",
        action="store_true",
        help="Only consider professionals with training or certifications",
    )
    family_parser.add_argument(
        "--min-experience",
        type=int,
        default=0,
        help="Only consider professionals with at least this many years of experience",
    )
    family_parser.add_argument(
        "--rate",
        nargs=2,
        type=float,
        metavar=("LOW", "HIGH"),
        default=None,
        help="Only consider professionals whose hourly rate overlaps LOW-HIGH",
    )
    _add_common_args(family_parser)

    # --- professional-matches subcommand ---
    professional_parser = subparsers.add_parser(
        "professional-matches",
        help="Rank families for a professional",
    )
    professional_parser.add_argument("professional_id", help="Professional profile id")
    _add_ranking_args(professional_parser)
    _add_common_args(professional_parser)

    # --- score subcommand ---
    score_parser = subparsers.add_parser(
        "score",
        help="Show the score breakdown for one family/professional pair",
    )
    score_parser.add_argument("family_id", help="Family profile id")
    score_parser.add_argument("professional_id", help="Professional profile id")
    _add_common_args(score_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(config: str | None) -> Settings:
    """Load settings from an explicit path, the default path, or built-in defaults."""
    if config is not None:
        return Settings.from_yaml(config)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return Settings.from_yaml(DEFAULT_CONFIG_PATH)
    logger.debug("No %s found - using default settings", DEFAULT_CONFIG_PATH)
    return Settings()


def build_filters(args: argparse.Namespace) -> list[Filter]:
    """Build browse filters from ranking arguments."""
    filters: list[Filter] = [
        CareTypesFilter(args.care_type),
        SpecialNeedsFilter(args.special_need),
        ScheduleFilter(args.schedule),
    ]
    if getattr(args, "certification", None):
        filters.append(CertificationsFilter(args.certification))
    if getattr(args, "trained_only", False):
        filters.append(TrainedOnlyFilter())
    if getattr(args, "min_experience", 0):
        filters.append(MinimumExperienceFilter(args.min_experience))
    if getattr(args, "rate", None):
        low, high = args.rate
        filters.append(HourlyRateFilter(low, high))
    return filters


def print_professional_matches(family_id: str, matches: list[ProfessionalMatch]) -> None:
    print(f"\nTop {len(matches)} professionals for family {family_id}:")
    for rank, m in enumerate(matches, start=1):
        p = m.professional
        print(f"  {rank:>2}. {m.match_score:6.2f}  {p.full_name or p.id}  "
              f"({p.location or 'location not specified'})")


def print_family_matches(professional_id: str, matches: list[FamilyMatch]) -> None:
    print(f"\nTop {len(matches)} families for professional {professional_id}:")
    for rank, m in enumerate(matches, start=1):
        f = m.family
        recipient = f.care_recipient.full_name if f.care_recipient else ""
        label = f.full_name or f.id
        if recipient:
            label = f"{label} - caring for {recipient}"
        print(f"  {rank:>2}. {m.match_score:6.2f}  {label}  "
              f"({f.location or 'location not specified'})")


def cmd_import_profiles(args: argparse.Namespace, settings: Settings) -> None:
    """Handle import-profiles subcommand."""
    print(f"Loading roster from {args.roster}...")
    roster = Roster.from_yaml(args.roster)
    conn = init_db(settings.database.path)
    try:
        counts = import_roster(conn, roster)
    finally:
        conn.close()
    print(f"Imported into {settings.database.path}:")
    for kind, count in counts.items():
        print(f"  {kind}: {count}")


async def cmd_family_matches(args: argparse.Namespace, settings: Settings) -> None:
    """Handle family-matches subcommand."""
    conn = init_db(settings.database.path)
    try:
        matches = await matches_for_family(
            SqliteProfileStore(conn),
            args.family_id,
            limit=args.limit,
            settings=settings,
            filters=build_filters(args),
        )
    finally:
        conn.close()
    if args.export == "json":
        print(export_matches_json(matches))
    else:
        print_professional_matches(args.family_id, matches)


async def cmd_professional_matches(args: argparse.Namespace, settings: Settings) -> None:
    """Handle professional-matches subcommand."""
    conn = init_db(settings.database.path)
    try:
        matches = await matches_for_professional(
            SqliteProfileStore(conn),
            args.professional_id,
            limit=args.limit,
            settings=settings,
            filters=build_filters(args),
        )
    finally:
        conn.close()
    if args.export == "json":
        print(export_matches_json(matches))
    else:
        print_family_matches(args.professional_id, matches)


async def cmd_score(args: argparse.Namespace, settings: Settings) -> None:
    """Handle score subcommand."""
    conn = init_db(settings.database.path)
    try:
        store = SqliteProfileStore(conn)
        family = await store.get_family(args.family_id)
        if family is None:
            raise ProfileNotFoundError(args.family_id, ROLE_FAMILY)
        professional = await store.get_professional(args.professional_id)
        if professional is None:
            raise ProfileNotFoundError(args.professional_id, ROLE_PROFESSIONAL)
        result = await score_pair(store, family, professional, settings.scoring)
    finally:
        conn.close()

    print(f"Family {result.family_id} / professional {result.professional_id}: "
          f"{result.match_score:.2f}")
    for name, value in result.match_details.model_dump(by_alias=True).items():
        print(f"  {name:<18} {value:6.2f}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "import-profiles":
            cmd_import_profiles(args, settings)
        elif args.command == "family-matches":
            asyncio.run(cmd_family_matches(args, settings))
        elif args.command == "professional-matches":
            asyncio.run(cmd_professional_matches(args, settings))
        else:
            asyncio.run(cmd_score(args, settings))
    except (FileNotFoundError, ValueError, CareMatchError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
