from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from ..errors import ValidationError

HEADER = ["name", "teacher", "department", "semester", "periodsPerWeek", "isLab", "capacity"]


@dataclass
class ParsedLine:
    line_no: int
    fields: Dict[str, object]
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass
class ImportReport:
    lines: List[ParsedLine] = field(default_factory=list)

    @property
    def valid(self) -> List[ParsedLine]:
        return [l for l in self.lines if l.is_valid]

    @property
    def invalid(self) -> List[ParsedLine]:
        return [l for l in self.lines if not l.is_valid]

    def errors(self) -> List[str]:
        return [f"line {l.line_no}: {l.error}" for l in self.invalid]


def _positive_int(raw: str, what: str) -> int:
    try:
        v = int(raw)
    except ValueError:
        raise ValidationError(f"{what} must be a number greater than 0.") from None
    if v < 1:
        raise ValidationError(f"{what} must be a number greater than 0.")
    return v


def parse_line(line: str) -> Dict[str, object]:
    cols = [c.strip() for c in line.split(",")]
    if len(cols) < 6 or len(cols) > 7:
        raise ValidationError(f"Expected 6 or 7 columns, found {len(cols)}.")
    name, teacher, department, semester, periods_raw, lab_raw = cols[:6]
    capacity_raw = cols[6] if len(cols) == 7 else ""
    if not all([name, teacher, department, semester, periods_raw, lab_raw]):
        raise ValidationError("One or more required fields are empty.")
    return {
        "name": name,
        "teacher": teacher,
        "department": department,
        "semester": semester,
        "periods_per_week": _positive_int(periods_raw, "Periods Per Week"),
        "is_lab": lab_raw.lower() == "true",
        "capacity": _positive_int(capacity_raw, "Capacity") if capacity_raw else None,
    }


def parse_bulk_text(text: str, existing: Set[Tuple[str, str, str, str]] | None = None) -> ImportReport:
    """Parse comma-separated subject lines; each line is judged on its own.

    ``existing`` holds (name, teacher, department, semester) keys already in
    the catalog; a line repeating one of them, or an earlier line, is invalid.
    """
    seen = set(existing or ())
    report = ImportReport()
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        # Optional header row
        if line_no == 1 and [c.strip() for c in line.split(",")][:6] == HEADER[:6]:
            continue
        try:
            fields = parse_line(line)
        except ValidationError as e:
            report.lines.append(ParsedLine(line_no, {}, str(e)))
            continue
        key = (fields["name"], fields["teacher"], fields["department"], fields["semester"])
        if key in seen:
            report.lines.append(ParsedLine(line_no, fields, "Duplicate of an existing subject."))
            continue
        seen.add(key)  # type: ignore[arg-type]
        report.lines.append(ParsedLine(line_no, fields))
    return report
