from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .errors import ValidationError
from .models.calendar import DEFAULT_DAYS, DEFAULT_SLOTS, SlotCalendar
from .scheduler.gateway import CommandGateway, FileGateway, GenerationGateway, OfflineGateway

STATE_DIR_ENV = "TIMEGRID_STATE_DIR"


@dataclass
class Settings:
    root: Path
    calendar: SlotCalendar = field(default_factory=SlotCalendar.default)
    state_dir: Path = Path("state")
    command: List[str] = field(default_factory=list)
    response_file: Path | None = None
    timeout: float = 120.0
    min_subjects: int = 5

    def gateway(self) -> GenerationGateway:
        if self.command:
            return CommandGateway(self.command, timeout=self.timeout)
        if self.response_file is not None:
            return FileGateway(self.response_file)
        return OfflineGateway()


def _project_root() -> Path:
    # timegrid/config.py -> project root is parents[1]
    return Path(__file__).resolve().parents[1]


def _resolve(root: Path, p: str | Path) -> Path:
    path = Path(p)
    return path if path.is_absolute() else root / path


def load_settings(project_root: Path | str | None = None) -> Settings:
    """Load configs/timegrid.toml if present, else defaults.

    Tables: [calendar] days/slots, [storage] state_dir,
    [generation] command/response_file/timeout/min_subjects.
    TIMEGRID_STATE_DIR overrides the state directory.
    """
    root: Path = _project_root() if project_root is None else Path(project_root)
    cfg = root / "configs" / "timegrid.toml"
    data: Dict[str, Any] = {}
    if cfg.exists():
        try:
            data = tomllib.loads(cfg.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValidationError(f"{cfg}: {e}") from e

    cal = data.get("calendar", {})
    calendar = SlotCalendar.from_config(cal.get("days", DEFAULT_DAYS), cal.get("slots", DEFAULT_SLOTS))

    storage = data.get("storage", {})
    state_dir = os.environ.get(STATE_DIR_ENV) or storage.get("state_dir", "state")

    gen = data.get("generation", {})
    command = gen.get("command", [])
    if isinstance(command, str):
        command = command.split()
    response_file = gen.get("response_file")
    try:
        timeout = float(gen.get("timeout", 120.0))
        min_subjects = int(gen.get("min_subjects", 5))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{cfg}: bad [generation] value: {e}") from e

    return Settings(
        root=root,
        calendar=calendar,
        state_dir=_resolve(root, state_dir),
        command=[str(c) for c in command],
        response_file=_resolve(root, response_file) if response_file else None,
        timeout=timeout,
        min_subjects=min_subjects,
    )
