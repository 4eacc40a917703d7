"""Rating aggregator: running judging statistics behind a single lock.

Judging events (project registrations, project exposures, votes) are folded
into O(1) state per event. Individual votes are never retained, so memory is
bounded by the number of distinct projects and judges, not by vote count.

Key design:
- Welford update per vote, Chan merge per batch (see moments.py)
- Validation runs before the lock; a rejected event changes nothing
- Votes are applied to a copy of the moments and committed only if finite
- snapshot() is the only read path and returns a disconnected Stats copy
- No undo: a recorded vote cannot be removed from the running estimate
"""

from __future__ import annotations

import math
import numbers
import threading
import time
from typing import Any, Callable, Iterable

import bittensor as bt

from .errors import InvalidOutcome
from .models import Stats
from .moments import RunningMoments, batch_moments


def _jid(judge_id: str | None) -> str:
    """Truncate judge identity for log readability."""
    if not judge_id:
        return "none"
    return judge_id[:16]


class RatingAggregator:
    """Owns the counters and the mu/sigma estimate for one judging session."""

    def __init__(
        self,
        score_min: float | None = None,
        score_max: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if score_min is not None and score_max is not None and score_min > score_max:
            raise ValueError(f"score_min {score_min} > score_max {score_max}")

        self.score_min = score_min
        self.score_max = score_max
        self._clock = clock
        self._started_at = clock()
        self._lock = threading.Lock()

        # Guarded by _lock
        self._projects: set[str] = set()
        self._judges: set[str] = set()
        self._seen = 0
        self._votes = 0
        self._moments = RunningMoments()

    # -- Validation (lock-free) --

    def _check_outcome(self, outcome: Any) -> float:
        if isinstance(outcome, bool) or not isinstance(outcome, numbers.Real):
            raise InvalidOutcome("not_a_number", type(outcome).__name__)

        try:
            value = float(outcome)
        except OverflowError:
            raise InvalidOutcome("not_finite", "too large for a float") from None
        if not math.isfinite(value):
            raise InvalidOutcome("not_finite", repr(value))
        if self.score_min is not None and value < self.score_min:
            raise InvalidOutcome("below_min", f"{value}<{self.score_min}")
        if self.score_max is not None and value > self.score_max:
            raise InvalidOutcome("above_max", f"{value}>{self.score_max}")
        return value

    def _reject(self, judge_id: str | None, exc: InvalidOutcome) -> InvalidOutcome:
        bt.logging.warning({"jury_aggregator": {"event": "vote_rejected", "judge": _jid(judge_id), "reason": exc.reason}})
        return exc

    def _commit(self, judge_id: str, project: str | None, candidate: RunningMoments, count: int) -> str | None:
        """Apply a prospective moments state. Caller holds _lock.

        Returns a rejection reason, or None if committed.
        """
        if project is not None and project not in self._projects:
            return "unknown_project"
        if not candidate.is_finite:
            return "out_of_range"
        self._votes += count
        self._judges.add(judge_id)
        self._moments = candidate
        return None

    # -- Mutations --

    def register_project(self, name: str) -> bool:
        """Add a project to the comparison domain.

        The first registration also counts as the project's first exposure,
        so seen >= projects always holds.

        Returns:
            True if the project was new, False if already registered.
        """
        if not name:
            raise InvalidOutcome("empty_project")

        with self._lock:
            if name in self._projects:
                return False
            self._projects.add(name)
            self._seen += 1
            total = len(self._projects)

        bt.logging.debug({"jury_aggregator": {"event": "project_registered", "projects": total}})
        return True

    def record_project_seen(self) -> None:
        """Count one project exposure."""
        with self._lock:
            self._seen += 1

    def record_vote(self, judge_id: str, outcome: Any, project: str | None = None) -> None:
        """Record one judgment.

        Raises:
            InvalidOutcome: outcome not a finite number within the score
                bounds, unknown project, empty judge id, or a value that
                would push the running estimate past float range.
        """
        try:
            if not judge_id:
                raise InvalidOutcome("empty_judge")
            value = self._check_outcome(outcome)
        except InvalidOutcome as e:
            raise self._reject(judge_id, e) from None

        with self._lock:
            candidate = self._moments.copy()
            candidate.update(value)
            reason = self._commit(judge_id, project, candidate, 1)

        if reason:
            raise self._reject(judge_id, InvalidOutcome(reason))
        bt.logging.debug({"jury_aggregator": {"event": "vote_recorded", "judge": _jid(judge_id)}})

    def record_votes(
        self,
        judge_id: str,
        outcomes: Iterable[Any],
        project: str | None = None,
    ) -> int:
        """Record a batch of judgments from one judge, all-or-nothing.

        The batch is validated and reduced outside the lock, then merged in
        O(1). Returns the number of votes recorded.
        """
        try:
            if not judge_id:
                raise InvalidOutcome("empty_judge")
            values = [self._check_outcome(o) for o in outcomes]
        except InvalidOutcome as e:
            raise self._reject(judge_id, e) from None

        if not values:
            return 0
        batch = batch_moments(values)
        if not batch.is_finite:
            raise self._reject(judge_id, InvalidOutcome("out_of_range"))

        with self._lock:
            candidate = self._moments.copy()
            candidate.merge(batch)
            reason = self._commit(judge_id, project, candidate, batch.count)

        if reason:
            raise self._reject(judge_id, InvalidOutcome(reason))
        bt.logging.debug({"jury_aggregator": {"event": "votes_recorded", "judge": _jid(judge_id), "count": batch.count}})
        return batch.count

    # -- Reads --

    def elapsed_seconds(self) -> float:
        """Seconds since construction, from a monotonic clock."""
        return max(self._clock() - self._started_at, 0.0)

    def snapshot(self) -> Stats:
        """Copy out the current state as an immutable Stats record."""
        with self._lock:
            projects = len(self._projects)
            seen = self._seen
            votes = self._votes
            judges = len(self._judges)
            moments = self._moments.copy()
            elapsed = self.elapsed_seconds()

        return Stats(
            projects=projects,
            seen=seen,
            votes=votes,
            time=int(elapsed),
            avg_mu=moments.mean,
            avg_sigma=moments.std,
            judges=judges,
        )


__all__ = ["RatingAggregator"]
