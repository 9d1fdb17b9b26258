from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .config import Settings
from .data.bulk_import import ImportReport, parse_bulk_text
from .data.catalog import SubjectCatalog
from .data.store import JsonStore
from .errors import ServiceUnavailable, TimegridError, UnknownFailure, ValidationError
from .models.subject import Subject
from .models.timetable import Grid, GridStore, Predicate
from .render.colors import department_colors, grid_departments
from .render.csv_out import csv_table, write_csv_table
from .render.html_ui import build_html, write_html_ui
from .render.runs import RenderCell, render_week
from .scheduler.blocks import insert_period, remove_period
from .scheduler.fallback import fallback_grid
from .scheduler.gateway import GenerationGateway, parse_generated
from .validate.checks import validate_grid

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    token: int
    applied: bool
    simulated: bool


class Planner:
    """Owns the catalog and the current grid; persists after every accepted change.

    Generation requests carry a token. A response is applied only when its
    token is still the latest one issued; manual grid edits and resets also
    advance the token, so a slow response never overwrites newer work.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        persistence: JsonStore | None = None,
        gateway: GenerationGateway | None = None,
    ):
        self.settings = settings
        self.calendar = settings.calendar
        self.persistence = persistence or JsonStore(settings.state_dir, self.calendar)
        self.gateway = gateway or settings.gateway()
        self.catalog = SubjectCatalog()
        self.store = GridStore(self.calendar)
        self.simulated = False
        self._token = 0
        self._lock = threading.Lock()

    @classmethod
    def open(cls, settings: Settings, **kwargs: Any) -> "Planner":
        planner = cls(settings, **kwargs)
        planner.load()
        return planner

    def load(self) -> None:
        subjects, grid = self.persistence.load()
        if subjects is not None:
            self.catalog = SubjectCatalog(subjects)
        self.catalog.last_removed = self.persistence.load_removed()
        if grid is not None:
            self.store.replace(grid)

    def _save_subjects(self) -> None:
        self.persistence.save_subjects(self.catalog.records)

    def _save_grid(self) -> None:
        self.persistence.save_grid(self.store.grid)

    def _advance_token(self) -> int:
        with self._lock:
            self._token += 1
            return self._token

    # Catalog

    def add_subject(self, **fields: Any) -> Subject:
        s = self.catalog.add(**fields)
        self._save_subjects()
        logger.info(f"Added subject {s.id}: {s.name} – {s.teacher}")
        return s

    def update_subject(self, subject_id: int, **changes: Any) -> Subject:
        s = self.catalog.update(subject_id, **changes)
        self._save_subjects()
        logger.info(f"Updated subject {s.id}: {s.name}")
        return s

    def remove_subject(self, subject_id: int) -> Subject:
        s = self.catalog.remove(subject_id)
        self._save_subjects()
        self.persistence.save_removed(s)
        logger.info(f"Removed subject {s.id}: {s.name}")
        return s

    def restore_removed(self) -> Subject:
        s = self.catalog.restore_removed()
        self._save_subjects()
        self.persistence.save_removed(None)
        logger.info(f"Restored subject {s.id}: {s.name}")
        return s

    def import_subjects(self, text: str) -> ImportReport:
        existing = {s.identity for s in self.catalog}
        report = parse_bulk_text(text, existing)
        for line in report.valid:
            self.catalog.add(**line.fields)
        if report.valid:
            self._save_subjects()
        for err in report.errors():
            logger.warning(f"Import skipped {err}")
        logger.info(f"Imported {len(report.valid)} subjects, {len(report.invalid)} invalid lines")
        return report

    def search_subjects(self, term: str = "") -> Dict[str, Dict[str, List[Subject]]]:
        return self.catalog.search(term)

    # Generation

    def begin_generation(self) -> int:
        n = len(self.catalog)
        if n < self.settings.min_subjects:
            raise ValidationError(
                f"Please add at least {self.settings.min_subjects} subjects to generate a timetable (have {n})."
            )
        return self._advance_token()

    def finish_generation(self, token: int, grid: Grid, *, simulated: bool = False) -> bool:
        with self._lock:
            if token != self._token:
                logger.info(f"Discarding stale generation result (token {token}, current {self._token})")
                return False
            self.store.replace(grid)
            self.simulated = simulated
            self._save_grid()
        logger.info(f"Applied generation result token {token}" + (" (simulated)" if simulated else ""))
        return True

    def generate(self) -> GenerationResult:
        token = self.begin_generation()
        subjects = list(self.catalog)
        simulated = False
        try:
            payload = self.gateway.generate(subjects)
            grid = parse_generated(payload, self.calendar)
        except ServiceUnavailable as e:
            logger.warning(f"Generation service unavailable ({e}); using fallback filler")
            grid = fallback_grid(subjects, self.calendar)
            simulated = True
        except TimegridError:
            raise
        except Exception as e:
            raise UnknownFailure(f"An unknown error occurred while generating the timetable: {e}") from e
        applied = self.finish_generation(token, grid, simulated=simulated)
        return GenerationResult(token=token, applied=applied, simulated=simulated)

    # Manual edits

    def insert_period(self, day: str, period_index: int, subject_id: int) -> List[int]:
        subject = self.catalog.get(subject_id)
        # Edit and token bump must be atomic against finish_generation
        with self._lock:
            idxs = insert_period(self.store, day, period_index, subject)
            self._token += 1
            self._save_grid()
        return idxs

    def remove_period(self, day: str, period_index: int) -> List[int]:
        with self._lock:
            idxs = remove_period(self.store, day, period_index)
            if idxs:
                self._token += 1
                self._save_grid()
        return idxs

    def reset(self) -> None:
        with self._lock:
            self._token += 1
            self.catalog.clear()
            self.store.clear()
            self.simulated = False
            self.persistence.clear()
        logger.info("Cleared subjects and timetable")

    # Presentation

    def colors(self) -> Dict[str, tuple[str, str]]:
        return department_colors(self.catalog.departments() + grid_departments(self.store.grid))

    def render(self, predicate: Predicate | None = None) -> Dict[str, List[RenderCell]]:
        return render_week(self.store.grid, self.calendar, predicate)

    def validate(self) -> Dict[str, object]:
        return validate_grid(self.store.grid, self.calendar)

    def export_csv(self, outputs_dir: Path, predicate: Predicate | None = None) -> Path:
        return write_csv_table(csv_table(self.render(predicate), self.calendar), outputs_dir)

    def export_html(self, outputs_dir: Path, predicate: Predicate | None = None) -> Path:
        html = build_html(self.render(predicate), self.calendar, self.colors(), simulated=self.simulated)
        return write_html_ui(html, outputs_dir)
