from __future__ import annotations

import json
from pathlib import Path
from typing import Dict


def write_validation_report(report: Dict[str, object], outputs_dir: Path) -> Path:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "validation.json"
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    return out_path


def format_validation_report(report: Dict[str, object]) -> str:
    lines: list[str] = []
    runs = report.get("lab_runs", [])
    lines.append(f"lab_runs: {len(runs) if isinstance(runs, list) else 0}")
    broken = report.get("broken_lab_runs", [])
    lines.append("broken_lab_runs:")
    if isinstance(broken, list):
        for b in broken:
            lines.append(f"  - {b}")
    lines.append(f"empty_slots: {report.get('empty_slots')}")
    lines.append("department_load:")
    load = report.get("department_load", {})
    if isinstance(load, dict):
        for k, v in load.items():
            lines.append(f"  - {k}: {v}")
    return "\n".join(lines)
