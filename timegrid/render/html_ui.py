from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Dict, List

from ..models.calendar import SlotCalendar
from .colors import NEUTRAL
from .runs import BREAK, LUNCH, OCCUPIED, RenderCell


def cell_html(c: RenderCell, colors: Dict[str, tuple[str, str]]) -> str:
    if c.kind in (BREAK, LUNCH):
        return f"<td class='{c.kind}'><div class='vcenter'><strong>{escape(c.label.upper())}</strong></div></td>"
    if c.kind != OCCUPIED or c.assignment is None:
        return "<td class='empty'></td>"
    a = c.assignment
    bg, fg = colors.get(a.department, NEUTRAL)
    span = f" colspan='{c.span}'" if c.span > 1 else ""
    lab = " lab" if a.is_lab else ""
    seats = f"<span class='seats'>{a.capacity} seats</span>" if a.capacity else ""
    return (
        f"<td{span} class='cell{lab}' style=\"background:{bg};color:{fg}\">"
        f"<div class='subj'>{escape(a.subject)}</div>"
        f"<div class='teacher'>{escape(a.teacher)}</div>"
        f"<div class='meta'>{escape(a.semester)}{seats}</div>"
        f"<div class='time'>{escape(c.time_range)}</div>"
        f"</td>"
    )


def build_html(
    week: Dict[str, List[RenderCell]],
    calendar: SlotCalendar,
    colors: Dict[str, tuple[str, str]],
    *,
    title: str = "Weekly Timetable",
    simulated: bool = False,
) -> str:
    head_cells = "".join(
        f"<th>{escape(s.label)}<br/><span class='time'>{escape(s.time_range)}</span></th>"
        for s in calendar.slots
    )
    rows_html = []
    for d in calendar.days:
        row_cells = "".join(cell_html(c, colors) for c in week[d])
        rows_html.append(f"<tr><th class='day'>{escape(d)}</th>{row_cells}</tr>")

    legend_items = "".join(
        f"<div class='legend-item'><span class='swatch' style='background:{bg}'></span>{escape(dept)}</div>"
        for dept, (bg, _) in colors.items()
    )
    banner = (
        "<p class='simulated'>Simulated timetable: the generation service was unavailable, "
        "subjects were filled in catalog order without checking conflicts.</p>"
        if simulated
        else ""
    )

    style = """
    <style>
    body { font-family: system-ui, Arial, sans-serif; margin: 20px; color: #222; }
    .legend { display:flex; gap:12px; flex-wrap:wrap; margin: 8px 0 20px; }
    .legend-item { display:flex; align-items:center; gap:6px; font-size: 13px; }
    .legend .swatch { width:16px; height:16px; display:inline-block; border:1px solid #ccc; }
    .tt { border-collapse: collapse; width: 100%; table-layout: fixed; }
    .tt th, .tt td { border: 1px solid #ddd; padding: 6px; vertical-align: middle; text-align: center; }
    .tt thead th { background:#f7f7f7; font-weight:600; }
    .tt .day { background:#fafafa; width: 110px; text-align:left; padding-left:8px; }
    .time { font-size: 11px; opacity: 0.7; }
    .subj { font-weight: 700; font-size: 13px; }
    .teacher { font-size: 12px; }
    .meta { font-size: 11px; font-family: monospace; }
    .seats { margin-left: 6px; padding-left: 6px; border-left: 1px solid currentColor; }
    .lab { border: 2px solid currentColor; }
    .break, .lunch { background:#f1f5f9; color:#94a3b8; }
    .break .vcenter, .lunch .vcenter { writing-mode: vertical-rl; transform: rotate(180deg); letter-spacing: 2px; }
    .empty { background:#fbfbfb; }
    .simulated { background:#fef3c7; padding: 8px; border-left: 4px solid #d97706; }
    @media print { body { margin: 0; } .tt { font-size: 10px; } }
    </style>
    """

    return (
        f"<html><head><meta charset='utf-8'><title>{escape(title)}</title>{style}</head><body>"
        f"<h1>{escape(title)}</h1>"
        + banner
        + f"<div class='legend'><strong>Departments:</strong> {legend_items}</div>"
        + "<table class='tt'>"
        + f"<thead><tr><th class='day'>Day</th>{head_cells}</tr></thead>"
        + f"<tbody>{''.join(rows_html)}</tbody>"
        + "</table></body></html>"
    )


def write_html_ui(html: str, outputs_dir: Path) -> Path:
    ui_dir = outputs_dir / "ui"
    ui_dir.mkdir(parents=True, exist_ok=True)
    out_path = ui_dir / "index.html"
    out_path.write_text(html, encoding="utf-8")
    return out_path
