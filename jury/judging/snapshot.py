"""Admin-gated stats access.

The credential check runs to completion before the aggregator is touched,
and outside any aggregator lock. Fail-closed: an unset admin secret rejects
every request.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

import bittensor as bt

from .errors import Unauthorized
from .models import AdminLogin, Stats

if TYPE_CHECKING:
    from .aggregator import RatingAggregator


class StatsSnapshotBuilder:
    """Releases aggregator snapshots to holders of the admin secret."""

    def __init__(self, admin_password: str):
        self._secret = admin_password.encode("utf-8")

    def check_credential(self, credential: AdminLogin | str) -> bool:
        """Constant-time comparison against the configured secret."""
        if isinstance(credential, AdminLogin):
            credential = credential.password
        supplied = credential.encode("utf-8")
        if not self._secret:
            # Still compare so an unset secret costs the same as a mismatch
            secrets.compare_digest(supplied, supplied)
            return False
        return secrets.compare_digest(supplied, self._secret)

    def request_stats(
        self, credential: AdminLogin | str, aggregator: RatingAggregator,
    ) -> Stats:
        """Return aggregator.snapshot() if the credential matches.

        Raises:
            Unauthorized: credential mismatch (aggregator not read).
        """
        if not self.check_credential(credential):
            bt.logging.warning({"jury_stats": {"event": "request_rejected", "status": 401}})
            raise Unauthorized()

        stats = aggregator.snapshot()
        bt.logging.info({"jury_stats": {"event": "request_served", "status": 200, "votes": stats.votes}})
        return stats


__all__ = ["StatsSnapshotBuilder"]
