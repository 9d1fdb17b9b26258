from __future__ import annotations

from timegrid.data.bulk_import import parse_bulk_text

TEXT = """name,teacher,department,semester,periodsPerWeek,isLab,capacity
Quantum Physics,Dr. Evelyn Reed,Physics,3rd Semester,3,TRUE,25
Classical Mechanics,Dr. Evelyn Reed,Physics,1st Semester,4,false

Too,Few,Columns
British Literature,,Literature,1st Semester,3,false,40
Advanced Calculus,Prof. Marcus Thorne,Mathematics,3rd Semester,zero,false
Linear Algebra,Prof. Marcus Thorne,Mathematics,1st Semester,3,false,-5
Quantum Physics,Dr. Evelyn Reed,Physics,3rd Semester,2,true
Intro to Chemistry,Prof. Samuel Chen,Chemistry,1st Semester,3,no,60
"""


def test_valid_lines_survive_invalid_neighbours() -> None:
    report = parse_bulk_text(TEXT)
    names = [l.fields["name"] for l in report.valid]
    assert names == ["Quantum Physics", "Classical Mechanics", "Intro to Chemistry"]
    assert [l.line_no for l in report.invalid] == [5, 6, 7, 8, 9]


def test_field_conversion() -> None:
    report = parse_bulk_text(TEXT)
    qp, cm, chem = (l.fields for l in report.valid)
    assert qp["is_lab"] is True and qp["periods_per_week"] == 3 and qp["capacity"] == 25
    assert cm["is_lab"] is False and cm["capacity"] is None
    assert chem["is_lab"] is False  # only "true" marks a lab


def test_error_messages() -> None:
    errors = parse_bulk_text(TEXT).errors()
    assert errors[0] == "line 5: Expected 6 or 7 columns, found 3."
    assert "required fields" in errors[1]
    assert "Periods Per Week" in errors[2]
    assert "Capacity" in errors[3]
    assert "Duplicate" in errors[4]


def test_existing_catalog_entries_are_duplicates() -> None:
    existing = {("Quantum Physics", "Dr. Evelyn Reed", "Physics", "3rd Semester")}
    report = parse_bulk_text("Quantum Physics,Dr. Evelyn Reed,Physics,3rd Semester,3,true", existing)
    assert not report.valid and len(report.invalid) == 1


def test_blank_input() -> None:
    report = parse_bulk_text("\n   \n")
    assert report.lines == []
