"""Settings for the judging core.

Sources, lowest to highest priority:
  1. defaults
  2. CLI arguments (``--score.min`` / ``--score.max``)
  3. environment (``JURY_*``), optionally loaded from a ``.env`` file

The admin secret is only ever read from the environment.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass

import bittensor as bt
from dotenv import load_dotenv


@dataclass
class JurySettings:
    """Resolved judging settings."""

    admin_password: str = ""
    score_min: float | None = None
    score_max: float | None = None

    def __repr__(self) -> str:
        # Keep the secret out of logs
        return (
            f"JurySettings(admin_password={'<set>' if self.admin_password else '<unset>'}, "
            f"score_min={self.score_min}, score_max={self.score_max})"
        )


def _test_mode() -> bool:
    return os.environ.get("JURY_TEST_MODE", "").lower() in ("true", "1")


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def add_args(parser: argparse.ArgumentParser) -> None:
    """Adds the judging score bounds to a parser."""
    parser.add_argument(
        "--score.min",
        type=float,
        help="Lowest accepted vote outcome (unbounded if unset).",
        default=None,
    )
    parser.add_argument(
        "--score.max",
        type=float,
        help="Highest accepted vote outcome (unbounded if unset).",
        default=None,
    )


def load_settings(args: argparse.Namespace | None = None) -> JurySettings:
    """Resolve settings from CLI args and the environment.

    Raises:
        ValueError: malformed numeric env var or score_min > score_max.
    """
    # Load .env if not in test mode
    if not _test_mode():
        load_dotenv()

    settings = JurySettings(
        admin_password=os.environ.get("JURY_ADMIN_PASSWORD", ""),
        score_min=_env_float("JURY_SCORE_MIN", getattr(args, "score.min", None)),
        score_max=_env_float("JURY_SCORE_MAX", getattr(args, "score.max", None)),
    )

    if (
        settings.score_min is not None
        and settings.score_max is not None
        and settings.score_min > settings.score_max
    ):
        raise ValueError(f"score_min {settings.score_min} > score_max {settings.score_max}")

    if not settings.admin_password:
        bt.logging.warning({"jury_config": {"admin_password": "unset", "stats_access": "disabled"}})
    return settings


__all__ = ["JurySettings", "add_args", "load_settings"]
