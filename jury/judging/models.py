"""Pydantic models for the judging data contracts.

Two exchanged shapes:
- AdminLogin: the administrator credential payload (inbound)
- Stats: the statistics snapshot record (outbound, field order is the wire order)

Plus the roster/project/vote records read from CSV imports.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Wire limits - Stats counters are unsigned 64-bit on the wire
# ---------------------------------------------------------------------------

U64_MAX = 2**64 - 1


# ---------------------------------------------------------------------------
# Admin credential
# ---------------------------------------------------------------------------


class AdminLogin(BaseModel):
    """Administrator login payload. Transient: built per request, never stored."""

    password: str = Field(repr=False)


# ---------------------------------------------------------------------------
# Statistics snapshot
# ---------------------------------------------------------------------------


class Stats(BaseModel):
    """Point-in-time copy of aggregator state.

    Frozen: holding a Stats gives no view of later updates. The default
    instance (all zeros) means "no information yet", not a real rating.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    projects: int = Field(default=0, ge=0, le=U64_MAX)
    seen: int = Field(default=0, ge=0, le=U64_MAX)
    votes: int = Field(default=0, ge=0, le=U64_MAX)
    time: int = Field(default=0, ge=0, le=U64_MAX, description="whole seconds since aggregation start")
    avg_mu: float = 0.0
    avg_sigma: float = Field(default=0.0, ge=0.0)
    judges: int = Field(default=0, ge=0, le=U64_MAX)


# ---------------------------------------------------------------------------
# CSV import records
# ---------------------------------------------------------------------------


class Judge(BaseModel):
    """Judge roster entry."""

    name: str
    email: str
    notes: str = ""


class Project(BaseModel):
    """Project listing entry with its assigned table number."""

    name: str
    table: int = Field(ge=0)
    description: str = ""
    url: str = ""
    try_link: str = ""
    video_link: str = ""
    locality: int = 0
    challenge_list: list[str] = Field(default_factory=list)


class VoteRecord(BaseModel):
    """One judgment event replayed from a votes file."""

    judge: str = Field(min_length=1)
    outcome: float
    project: str | None = None


__all__ = [
    "U64_MAX",
    "AdminLogin",
    "Judge",
    "Project",
    "Stats",
    "VoteRecord",
]
