#!/usr/bin/env python3
"""Compute standings locally from Supabase or a JSON snapshot."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.config import get_settings
from src.persistence import SnapshotStore, StorageError, SupabaseStore
from src.processor import StandingsBuilder
from src.processor.output import (
    championship_payload,
    generate_championship_output,
    generate_team_rally_output,
    rally_payload,
    team_championship_payload,
    write_json,
)

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="JSON snapshot to read instead of Supabase",
    )
    parser.add_argument("--championship", help="Championship ID")
    parser.add_argument("--team-championship", help="Team championship ID")
    parser.add_argument("--rally", help="Rally ID for class results")
    parser.add_argument("--team-rally", help="Rally ID for team results")
    parser.add_argument("--class-id", help="Restrict team results to one class")
    parser.add_argument(
        "--output",
        type=Path,
        help="Output directory (defaults to OUTPUT_PATH)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def print_championship(payload: dict) -> None:
    """Print championship standings as plain text tables."""
    print(f"{payload['championship_name'] or payload['championship_id']}")
    print(f"Rounds: {payload['total_rounds']}")
    for warning in payload["warnings"]:
        print(f"  ! {warning}")

    for class_data in payload["classes"]:
        print(f"\n{class_data['class_name']}")
        for s in class_data["standings"]:
            rounds = " ".join(f"{v:>4}" for v in s["rounds"].values())
            print(
                f"  {s['position']:>3}. {s['participant_name']:<30} "
                f"{rounds}  {s['total_points']:>5}"
            )


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    output_dir = args.output or settings.output_dir
    snapshot = args.snapshot or settings.snapshot_file

    if snapshot:
        store = SnapshotStore.from_file(snapshot)
    elif settings.has_supabase:
        store = SupabaseStore.from_settings(settings)
    else:
        print(
            "No data source. Pass --snapshot or set SUPABASE_URL and SUPABASE_KEY.",
            file=sys.stderr,
        )
        return 2

    try:
        with store:
            builder = StandingsBuilder(
                store, contributor_count=settings.team_contributor_count
            )

            if args.championship:
                standings = builder.championship_standings(args.championship)
                print_championship(championship_payload(standings))
                path = generate_championship_output(standings, output_dir)
                print(f"\nWrote {path}")

            if args.team_championship:
                team_standings = builder.team_championship_standings(
                    args.team_championship
                )
                path = write_json(
                    team_championship_payload(team_standings),
                    output_dir,
                    f"team_championship_{args.team_championship}.json",
                )
                print(f"Wrote {path}")

            if args.rally:
                results = builder.rally_results(args.rally)
                path = write_json(
                    rally_payload(results),
                    output_dir,
                    f"rally_{args.rally}.json",
                )
                print(f"Wrote {path}")

            if args.team_rally:
                team_results = builder.team_rally_results(
                    args.team_rally, args.class_id
                )
                path = generate_team_rally_output(
                    args.team_rally, team_results, output_dir
                )
                print(f"Wrote {path}")
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
