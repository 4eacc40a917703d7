"""Judging statistics core.

Judging events feed a RatingAggregator, which keeps a running mu/sigma
estimate of vote outcomes plus project/exposure/vote/judge counters.
Admin-gated reads go through StatsSnapshotBuilder and come back as an
immutable Stats record, the shape exchanged with other services.
"""

from .aggregator import RatingAggregator
from .csv_io import (
    create_judge_csv,
    create_project_csv,
    parse_devpost_csv,
    parse_judge_csv,
    parse_project_csv,
    parse_vote_csv,
)
from .errors import InvalidOutcome, JuryError, Unauthorized
from .models import AdminLogin, Judge, Project, Stats, VoteRecord
from .moments import RunningMoments, batch_moments
from .snapshot import StatsSnapshotBuilder

__all__ = [
    "AdminLogin",
    "InvalidOutcome",
    "Judge",
    "JuryError",
    "Project",
    "RatingAggregator",
    "RunningMoments",
    "Stats",
    "StatsSnapshotBuilder",
    "Unauthorized",
    "VoteRecord",
    "batch_moments",
    "create_judge_csv",
    "create_project_csv",
    "parse_devpost_csv",
    "parse_judge_csv",
    "parse_project_csv",
    "parse_vote_csv",
]
