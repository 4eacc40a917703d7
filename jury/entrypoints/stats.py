"""Judging stats entrypoint.

Loads a project list, replays a votes file through a RatingAggregator and
prints the admin-gated stats record as JSON. Rejected votes are logged and
counted, not fatal; unreadable or malformed input and a wrong admin
password exit non-zero.

Example:
  JURY_ADMIN_PASSWORD=... python -m jury.entrypoints.stats \\
      --projects.csv projects.csv --votes.csv votes.csv --admin.password ...
"""

import argparse
import json
import sys
from pathlib import Path

import bittensor as bt

from jury.base.config import add_args, load_settings
from jury.judging import (
    InvalidOutcome,
    Project,
    RatingAggregator,
    StatsSnapshotBuilder,
    Unauthorized,
    VoteRecord,
    parse_devpost_csv,
    parse_project_csv,
    parse_vote_csv,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Jury judging stats")
    bt.logging.add_args(parser)
    add_args(parser)
    parser.add_argument("--projects.csv", type=str, default=None, help="Project list CSV.")
    parser.add_argument("--projects.devpost", type=str, default=None, help="Devpost project export CSV.")
    parser.add_argument("--votes.csv", type=str, default=None, help="Votes CSV: judge, outcome, [project].")
    parser.add_argument("--csv.header", action="store_true", default=False, help="CSV files start with a header row.")
    parser.add_argument("--admin.password", type=str, default="", help="Admin password for the stats request.")
    return parser


def _load_inputs(args: argparse.Namespace, has_header: bool) -> tuple[list[Project], list[VoteRecord]]:
    """Read and parse the project and vote files named on the command line.

    Raises:
        OSError: unreadable file.
        ValueError: malformed CSV record.
    """
    projects: list[Project] = []
    next_table = 1
    projects_csv = getattr(args, "projects.csv")
    if projects_csv:
        loaded, next_table = parse_project_csv(Path(projects_csv).read_text(), has_header, next_table)
        projects.extend(loaded)
    devpost_csv = getattr(args, "projects.devpost")
    if devpost_csv:
        loaded, next_table = parse_devpost_csv(Path(devpost_csv).read_text(), next_table)
        projects.extend(loaded)

    votes: list[VoteRecord] = []
    votes_csv = getattr(args, "votes.csv")
    if votes_csv:
        votes = parse_vote_csv(Path(votes_csv).read_text(), has_header)
    return projects, votes


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValueError as e:
        bt.logging.error({"jury_stats": {"event": "bad_config", "error": str(e)}})
        return 1
    if not settings.admin_password:
        bt.logging.error("JURY_ADMIN_PASSWORD is required")
        return 1

    has_header = getattr(args, "csv.header")
    aggregator = RatingAggregator(score_min=settings.score_min, score_max=settings.score_max)

    try:
        projects, votes = _load_inputs(args, has_header)
        for project in projects:
            aggregator.register_project(project.name)
    except (OSError, ValueError) as e:
        bt.logging.error({"jury_stats": {"event": "bad_input", "error": str(e)}})
        return 1

    rejected = 0
    for vote in votes:
        try:
            aggregator.record_vote(vote.judge, vote.outcome, vote.project)
        except InvalidOutcome:
            rejected += 1

    bt.logging.info({"jury_stats": {"event": "replay_done", "projects": len(projects), "rejected_votes": rejected}})

    builder = StatsSnapshotBuilder(settings.admin_password)
    try:
        stats = builder.request_stats(getattr(args, "admin.password"), aggregator)
    except Unauthorized:
        bt.logging.error({"jury_stats": {"event": "unauthorized"}})
        return 1

    print(json.dumps(stats.model_dump(mode="json")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
