from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer

from ..app import Planner
from ..config import load_settings
from ..errors import TimegridError
from ..models.timetable import GridFilter
from ..render.runs import BREAK, LUNCH, OCCUPIED, RenderCell
from ..validate.report import format_validation_report, write_validation_report

ALL = "All"

app = typer.Typer(add_completion=False, help="Weekly timetable grid editor")


def setup_logging(project_root: Path, level: int = logging.INFO) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "timegrid.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def _planner(ctx: typer.Context) -> Planner:
    return Planner.open(load_settings(ctx.obj["root"]))


def _out(ctx: typer.Context, out: Path) -> Path:
    return out if out.is_absolute() else ctx.obj["root"] / out


def _filter(department: str | None, semester: str | None, teacher: str | None) -> GridFilter | None:
    def norm(v: str | None) -> str | None:
        return None if v in (None, "", ALL) else v

    f = GridFilter(norm(department), norm(semester), norm(teacher))
    return None if f == GridFilter() else f


def format_week(week: Dict[str, List[RenderCell]]) -> str:
    lines: List[str] = []
    for day, cells in week.items():
        lines.append(day)
        for c in cells:
            if c.kind in (BREAK, LUNCH):
                lines.append(f"  {c.time_range:<24} -- {c.label} --")
            elif c.kind == OCCUPIED and c.assignment is not None:
                a = c.assignment
                block = f" [lab x{c.span}]" if a.is_lab else ""
                lines.append(f"  {c.time_range:<24} {a.subject} – {a.teacher} ({a.semester}){block}")
            else:
                lines.append(f"  {c.time_range:<24} (free)")
    return "\n".join(lines)


def _run(fn) -> None:
    try:
        fn()
    except TimegridError as e:
        logging.getLogger(__name__).error(f"{type(e).__name__}: {e}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    ctx: typer.Context,
    root: Path = typer.Option(Path("."), help="Project root holding configs/ and state/"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    root = root.resolve()
    setup_logging(root, getattr(logging, log_level.upper(), logging.INFO))
    ctx.obj = {"root": root}


@app.command("subjects")
def cli_subjects(ctx: typer.Context, search: str = typer.Option("", help="Filter by name or teacher")) -> None:
    def go() -> None:
        grouped = _planner(ctx).search_subjects(search)
        for dept, by_sem in grouped.items():
            print(dept)
            for sem, subs in by_sem.items():
                print(f"  {sem}")
                for s in subs:
                    lab = f" lab x{s.periods_per_week}" if s.is_lab else f" {s.periods_per_week}/week"
                    cap = f" cap {s.capacity}" if s.capacity else ""
                    print(f"    [{s.id}] {s.name} – {s.teacher}{lab}{cap}")

    _run(go)


@app.command("add-subject")
def cli_add_subject(
    ctx: typer.Context,
    name: str = typer.Argument(...),
    teacher: str = typer.Argument(...),
    department: str = typer.Argument(...),
    semester: str = typer.Argument(...),
    periods: int = typer.Option(1, help="Periods per week (block length for labs)"),
    lab: bool = typer.Option(False, help="Lab subject scheduled as one contiguous block"),
    capacity: Optional[int] = typer.Option(None, help="Seat capacity"),
) -> None:
    def go() -> None:
        s = _planner(ctx).add_subject(
            name=name,
            teacher=teacher,
            department=department,
            semester=semester,
            is_lab=lab,
            periods_per_week=periods,
            capacity=capacity,
        )
        print(f"Added [{s.id}] {s.name}")

    _run(go)


@app.command("remove-subject")
def cli_remove_subject(ctx: typer.Context, subject_id: int = typer.Argument(...)) -> None:
    def go() -> None:
        s = _planner(ctx).remove_subject(subject_id)
        print(f"Removed [{s.id}] {s.name}")

    _run(go)


@app.command("edit-subject")
def cli_edit_subject(
    ctx: typer.Context,
    subject_id: int = typer.Argument(...),
    name: Optional[str] = typer.Option(None),
    teacher: Optional[str] = typer.Option(None),
    department: Optional[str] = typer.Option(None),
    semester: Optional[str] = typer.Option(None),
    periods: Optional[int] = typer.Option(None, help="Periods per week (block length for labs)"),
    lab: Optional[bool] = typer.Option(None, "--lab/--no-lab"),
    capacity: Optional[int] = typer.Option(None, help="Seat capacity"),
) -> None:
    fields = {
        "name": name,
        "teacher": teacher,
        "department": department,
        "semester": semester,
        "periods_per_week": periods,
        "is_lab": lab,
        "capacity": capacity,
    }
    changes = {k: v for k, v in fields.items() if v is not None}

    def go() -> None:
        if not changes:
            print("Nothing to change")
            return
        s = _planner(ctx).update_subject(subject_id, **changes)
        print(f"Updated [{s.id}] {s.name}")

    _run(go)


@app.command("restore-subject")
def cli_restore_subject(ctx: typer.Context) -> None:
    """Undo the most recent subject removal."""

    def go() -> None:
        s = _planner(ctx).restore_removed()
        print(f"Restored [{s.id}] {s.name}")

    _run(go)


@app.command("import")
def cli_import(ctx: typer.Context, path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    def go() -> None:
        report = _planner(ctx).import_subjects(path.read_text(encoding="utf-8"))
        print(f"Imported {len(report.valid)} subjects")
        for err in report.errors():
            print(f"  skipped {err}")

    _run(go)


@app.command("generate")
def cli_generate(ctx: typer.Context) -> None:
    def go() -> None:
        planner = _planner(ctx)
        result = planner.generate()
        if result.simulated:
            print("Generation service unavailable; produced a simulated timetable.")
        print(format_week(planner.render()))

    _run(go)


@app.command("show")
def cli_show(
    ctx: typer.Context,
    department: str = typer.Option(ALL, help="Filter by department"),
    semester: str = typer.Option(ALL, help="Filter by semester"),
    teacher: str = typer.Option(ALL, help="Filter by teacher"),
) -> None:
    def go() -> None:
        print(format_week(_planner(ctx).render(_filter(department, semester, teacher))))

    _run(go)


@app.command("add-period")
def cli_add_period(
    ctx: typer.Context,
    day: str = typer.Argument(...),
    period: int = typer.Argument(..., help="Class period number, starting at 1"),
    subject_id: int = typer.Argument(...),
) -> None:
    def go() -> None:
        idxs = _planner(ctx).insert_period(day, period - 1, subject_id)
        print(f"Placed {day} periods {[i + 1 for i in idxs]}")

    _run(go)


@app.command("remove-period")
def cli_remove_period(
    ctx: typer.Context,
    day: str = typer.Argument(...),
    period: int = typer.Argument(..., help="Class period number, starting at 1"),
) -> None:
    def go() -> None:
        idxs = _planner(ctx).remove_period(day, period - 1)
        print(f"Cleared {day} periods {[i + 1 for i in idxs]}" if idxs else "Nothing to remove")

    _run(go)


@app.command("export-csv")
def cli_export_csv(
    ctx: typer.Context,
    out: Path = typer.Option(Path("outputs"), help="Output directory"),
    department: str = typer.Option(ALL),
    semester: str = typer.Option(ALL),
    teacher: str = typer.Option(ALL),
) -> None:
    def go() -> None:
        print(_planner(ctx).export_csv(_out(ctx, out), _filter(department, semester, teacher)))

    _run(go)


@app.command("export-html")
def cli_export_html(
    ctx: typer.Context,
    out: Path = typer.Option(Path("outputs"), help="Output directory"),
    department: str = typer.Option(ALL),
    semester: str = typer.Option(ALL),
    teacher: str = typer.Option(ALL),
) -> None:
    def go() -> None:
        print(_planner(ctx).export_html(_out(ctx, out), _filter(department, semester, teacher)))

    _run(go)


@app.command("validate")
def cli_validate(ctx: typer.Context, out: Optional[Path] = typer.Option(None, help="Write validation.json here")) -> None:
    def go() -> None:
        report = _planner(ctx).validate()
        if out is not None:
            write_validation_report(report, _out(ctx, out))
        print(format_validation_report(report))

    _run(go)


@app.command("reset")
def cli_reset(ctx: typer.Context, yes: bool = typer.Option(False, "--yes", help="Skip confirmation")) -> None:
    if not yes:
        typer.confirm("Clear all subjects and the timetable?", abort=True)

    def go() -> None:
        _planner(ctx).reset()
        print("Cleared subjects and timetable")

    _run(go)


if __name__ == "__main__":  # pragma: no cover
    app()
