"""Tests for judge/project/vote CSV import and export."""

import csv
import io

import pytest

from jury.judging.csv_io import (
    create_judge_csv,
    create_project_csv,
    parse_devpost_csv,
    parse_judge_csv,
    parse_project_csv,
    parse_vote_csv,
)
from jury.judging.models import Judge, Project


def _devpost_row(title, status="Submitted", locality="", prizes=""):
    row = [""] * 14
    row[0] = title
    row[1] = f"https://devpost.com/{title.lower()}"
    row[2] = status
    row[6] = f"About {title}"
    row[7] = "https://try.example"
    row[8] = "https://video.example"
    row[9] = locality
    row[10] = prizes
    return row


def _to_csv(rows):
    buf = io.StringIO()
    csv.writer(buf).writerows(rows)
    return buf.getvalue()


class TestJudgeCSV:

    def test_empty_content(self):
        assert parse_judge_csv("") == []

    def test_parse_with_header(self):
        content = "name,email,notes\nAda,ada@example.com,hardware\nGrace,grace@example.com,\n"
        judges = parse_judge_csv(content, has_header=True)
        assert [j.name for j in judges] == ["Ada", "Grace"]
        assert judges[0].notes == "hardware"
        assert judges[1].notes == ""

    def test_wrong_field_count(self):
        with pytest.raises(ValueError, match="does not contain 3 elements"):
            parse_judge_csv("Ada,ada@example.com\n")

    def test_export_has_header(self):
        data = create_judge_csv([Judge(name="Ada", email="ada@example.com", notes="n")])
        rows = list(csv.reader(io.StringIO(data.decode())))
        assert rows[0] == ["Name", "Email", "Notes"]
        assert rows[1] == ["Ada", "ada@example.com", "n"]


class TestProjectCSV:

    def test_empty_content_keeps_table(self):
        assert parse_project_csv("", next_table=5) == ([], 5)

    def test_sequential_tables(self):
        content = "Alpha,desc a,https://a,\nBeta,desc b,https://b,https://try.b\n"
        projects, next_table = parse_project_csv(content)
        assert [p.table for p in projects] == [1, 2]
        assert next_table == 3
        assert projects[1].try_link == "https://try.b"

    def test_locality_bumps_table(self):
        content = "Alpha,d,u,,,10\nBeta,d,u,\n"
        projects, next_table = parse_project_csv(content)
        assert projects[0].table == 10
        assert projects[0].locality == 10
        assert projects[1].table == 11
        assert next_table == 12

    def test_locality_carries_to_later_rows(self):
        content = "Alpha,d,u,,,5\nBeta,d,u,\nGamma,d,u,,,7\nDelta,d,u,\n"
        projects, next_table = parse_project_csv(content)
        assert [p.locality for p in projects] == [5, 5, 7, 7]
        assert [p.table for p in projects] == [5, 6, 7, 8]
        assert next_table == 9

    def test_challenge_list_trimmed(self):
        content = 'Alpha,d,u,,,," Best Hack , Best Design "\n'
        projects, _ = parse_project_csv(content)
        assert projects[0].challenge_list == ["Best Hack", "Best Design"]

    def test_too_few_fields(self):
        with pytest.raises(ValueError, match="less than 4 elements"):
            parse_project_csv("Alpha,desc,url\n")

    def test_header_skipped(self):
        content = "name,description,url,try\nAlpha,d,u,\n"
        projects, _ = parse_project_csv(content, has_header=True)
        assert [p.name for p in projects] == ["Alpha"]

    def test_export(self):
        data = create_project_csv([
            Project(name="Alpha", table=4, url="https://a", challenge_list=["X", "Y"]),
        ])
        rows = list(csv.reader(io.StringIO(data.decode())))
        assert rows[0][:2] == ["Name", "Table"]
        assert rows[1][0] == "Alpha"
        assert rows[1][1] == "Table 4"
        assert rows[1][-1] == "X,Y"

    def test_export_columns(self):
        data = create_project_csv([Project(name="Alpha", table=4, locality=3)])
        rows = list(csv.reader(io.StringIO(data.decode())))
        assert rows[0] == [
            "Name", "Table", "Description", "URL", "TryLink", "VideoLink", "Locality", "ChallengeList",
        ]
        assert rows[1][6] == "3"


class TestDevpostCSV:

    def test_drafts_skipped(self):
        content = _to_csv([
            ["header"] * 14,
            _devpost_row("Alpha"),
            _devpost_row("Draftee", status="Draft"),
            _devpost_row("Beta", prizes="Best Hack, Best UI"),
        ])
        projects, next_table = parse_devpost_csv(content)
        assert [p.name for p in projects] == ["Alpha", "Beta"]
        assert [p.table for p in projects] == [1, 2]
        assert next_table == 3
        assert projects[0].description == "About Alpha"
        assert projects[0].url == "https://devpost.com/alpha"
        assert projects[1].challenge_list == ["Best Hack", "Best UI"]

    def test_short_row_rejected(self):
        content = _to_csv([["header"] * 14, ["Alpha", "url", "Submitted"]])
        with pytest.raises(ValueError, match="invalid devpost csv"):
            parse_devpost_csv(content)

    def test_locality(self):
        content = _to_csv([["header"] * 14, _devpost_row("Alpha", locality="20")])
        projects, next_table = parse_devpost_csv(content, next_table=3)
        assert projects[0].table == 20
        assert next_table == 21

    def test_locality_carries_to_later_rows(self):
        content = _to_csv([
            ["header"] * 14,
            _devpost_row("Alpha", locality="20"),
            _devpost_row("Beta"),
        ])
        projects, next_table = parse_devpost_csv(content)
        assert [p.locality for p in projects] == [20, 20]
        assert [p.table for p in projects] == [20, 21]
        assert next_table == 22


class TestVoteCSV:

    def test_parse(self):
        votes = parse_vote_csv("A,1.0\nB,2.5,Alpha\n")
        assert votes[0].judge == "A"
        assert votes[0].project is None
        assert votes[1].outcome == 2.5
        assert votes[1].project == "Alpha"

    def test_bad_outcome(self):
        with pytest.raises(ValueError, match="invalid outcome"):
            parse_vote_csv("A,great\n")

    def test_too_few_fields(self):
        with pytest.raises(ValueError):
            parse_vote_csv("A\n")
