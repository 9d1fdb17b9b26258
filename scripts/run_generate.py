from pathlib import Path
import sys

# Ensure project root on sys.path for direct script execution
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from timegrid.app import Planner
from timegrid.cli.main import format_week, setup_logging
from timegrid.config import load_settings


def main() -> None:
    setup_logging(root)
    planner = Planner.open(load_settings(root))
    if not len(planner.catalog):
        planner.import_subjects((root / "data" / "subjects.csv").read_text(encoding="utf-8"))
    result = planner.generate()
    print(format_week(planner.render()))
    if result.simulated:
        print("(simulated: generation service unavailable)")
    print(planner.export_csv(root / "outputs"))
    print(planner.export_html(root / "outputs"))


if __name__ == "__main__":
    # Typer app is available via `python -m timegrid.cli.main` too.
    main()
