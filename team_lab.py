"""
Team generation lab: run the generator against a roster file and inspect the draw.

Roster file format (JSON list):
    [{"id": "p1", "name": "Alice", "category": "Ultra Pro", "deleted": false}, ...]

Usage:
    python team_lab.py roster.json --size 3 --seed 42
    python team_lab.py roster.json --size 2 --select p1 p2 p3
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from config import DEFAULT_TEAM_SIZE, TEAMGEN_SEED
from domain.models.player import Player, Roster, SkillTier, TierSelection
from domain.services.composition_service import CompositionReport
from services.notification_sink import CollectingNotificationSink
from services.team_generation_service import TeamGenerationService
from utils.formatting import format_composition_report, format_team_sheet


def load_roster(path: Path) -> Roster:
    """
    Read a JSON roster file.

    Raises:
        ValueError: If an entry is missing fields or has an unknown category
    """
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)

    players = []
    for entry in entries:
        try:
            players.append(
                Player(
                    id=str(entry["id"]),
                    name=entry["name"],
                    tier=SkillTier.from_label(entry["category"]),
                    deleted=bool(entry.get("deleted", False)),
                )
            )
        except KeyError as exc:
            raise ValueError(f"Roster entry {entry!r} is missing {exc}") from None
    return Roster.from_players(players)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate skill-balanced teams from a roster file.")
    parser.add_argument("roster", type=Path, help="JSON roster file")
    parser.add_argument("--size", type=int, default=DEFAULT_TEAM_SIZE, help="Team size (1-4)")
    parser.add_argument("--seed", type=int, default=TEAMGEN_SEED, help="Random seed for a reproducible draw")
    parser.add_argument("--select", nargs="*", metavar="ID", help="Player ids to include (default: everyone)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log rule and swap details")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        roster = load_roster(args.roster)
    except (OSError, ValueError) as exc:
        print(f"Error loading roster: {exc}", file=sys.stderr)
        return 1

    selection = (
        TierSelection.from_ids(args.select, roster) if args.select is not None else TierSelection.all_of(roster)
    )
    notifier = CollectingNotificationSink()
    service = TeamGenerationService(rng=random.Random(args.seed), notifier=notifier)
    result = service.generate_teams(roster, selection, args.size)

    if not result:
        for message, _code in notifier.messages:
            print(message, file=sys.stderr)
        return 1

    teams = result.unwrap()
    print(format_team_sheet(teams, args.size))
    print()
    print(format_composition_report(CompositionReport.from_teams(teams)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
