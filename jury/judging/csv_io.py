"""CSV import/export for judges, projects and replayed votes.

Formats:
  judges:   name, email, notes
  projects: name, description, url, try_link, [video_link], [locality], [challenges]
  devpost:  Devpost project export (header always present, drafts skipped)
  votes:    judge, outcome, [project]

Projects get sequential table numbers starting from ``next_table``. A row
without a locality inherits the previous row's; a locality larger than the
running table number moves numbering up to it.
"""

from __future__ import annotations

import csv
import io
from typing import Iterable

from .models import Judge, Project, VoteRecord

_DEVPOST_MIN_COLUMNS = 13


def _reader(content: str, has_header: bool):
    reader = csv.reader(io.StringIO(content))
    if has_header:
        next(reader, None)
    return reader


def _split_challenges(raw: str) -> list[str]:
    if not raw:
        return []
    return [c.strip() for c in raw.split(",")]


def _opt(record: list[str], idx: int) -> str:
    return record[idx] if len(record) > idx else ""


def parse_judge_csv(content: str, has_header: bool = False) -> list[Judge]:
    """Parse a judge roster. Every record must have exactly 3 fields."""
    if not content:
        return []

    judges = []
    for record in _reader(content, has_header):
        if not record:
            continue
        if len(record) != 3:
            raise ValueError(f"record does not contain 3 elements: '{','.join(record)}'")
        judges.append(Judge(name=record[0], email=record[1], notes=record[2]))
    return judges


def parse_project_csv(
    content: str, has_header: bool = False, next_table: int = 1,
) -> tuple[list[Project], int]:
    """Parse a project list.

    Returns:
        (projects, next_table) where next_table is the first unused table.
    """
    if not content:
        return [], next_table

    projects = []
    # A row without a locality keeps the previous row's
    locality = 0
    for record in _reader(content, has_header):
        if not record:
            continue
        if len(record) < 4:
            raise ValueError(f"record contains less than 4 elements: '{','.join(record)}'")

        if _opt(record, 5):
            locality = int(record[5])
        next_table = max(next_table, locality)

        projects.append(Project(
            name=record[0],
            table=next_table,
            description=record[1],
            url=record[2],
            try_link=record[3],
            video_link=_opt(record, 4),
            locality=locality,
            challenge_list=_split_challenges(_opt(record, 6)),
        ))
        next_table += 1

    return projects, next_table


def parse_devpost_csv(content: str, next_table: int = 1) -> tuple[list[Project], int]:
    """Parse a Devpost project export.

    Columns used: 0 title, 1 submission url, 2 status (Draft rows skipped),
    6 about, 7 try-it-out links, 8 video demo, 9 locality, 10 opt-in prizes.
    """
    if not content:
        return [], next_table

    projects = []
    locality = 0
    for record in _reader(content, has_header=True):
        if not record:
            continue
        if len(record) < _DEVPOST_MIN_COLUMNS:
            raise ValueError(
                f"record does not contain {_DEVPOST_MIN_COLUMNS} or more elements "
                f"(invalid devpost csv): '{','.join(record)}'"
            )
        if record[2] == "Draft":
            continue

        if record[9]:
            locality = int(record[9])
        next_table = max(next_table, locality)

        projects.append(Project(
            name=record[0],
            table=next_table,
            description=record[6],
            url=record[1],
            try_link=record[7],
            video_link=record[8],
            locality=locality,
            challenge_list=_split_challenges(record[10]),
        ))
        next_table += 1

    return projects, next_table


def parse_vote_csv(content: str, has_header: bool = False) -> list[VoteRecord]:
    """Parse replayed judgments. Outcome must parse as a float."""
    if not content:
        return []

    votes = []
    for record in _reader(content, has_header):
        if not record:
            continue
        if len(record) < 2:
            raise ValueError(f"record contains less than 2 elements: '{','.join(record)}'")
        try:
            outcome = float(record[1])
        except ValueError:
            raise ValueError(f"invalid outcome '{record[1]}' in record: '{','.join(record)}'") from None
        votes.append(VoteRecord(
            judge=record[0],
            outcome=outcome,
            project=_opt(record, 2) or None,
        ))
    return votes


def create_judge_csv(judges: Iterable[Judge]) -> bytes:
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(["Name", "Email", "Notes"])
    for judge in judges:
        w.writerow([judge.name, judge.email, judge.notes])
    return buf.getvalue().encode()


def create_project_csv(projects: Iterable[Project]) -> bytes:
    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(["Name", "Table", "Description", "URL", "TryLink", "VideoLink", "Locality", "ChallengeList"])
    for p in projects:
        w.writerow([
            p.name,
            f"Table {p.table}",
            p.description,
            p.url,
            p.try_link,
            p.video_link,
            p.locality,
            ",".join(p.challenge_list),
        ])
    return buf.getvalue().encode()


__all__ = [
    "create_judge_csv",
    "create_project_csv",
    "parse_devpost_csv",
    "parse_judge_csv",
    "parse_project_csv",
    "parse_vote_csv",
]
