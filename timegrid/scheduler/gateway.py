from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, List, Protocol, Sequence

from ..errors import MalformedResponse, ServiceUnavailable
from ..models.calendar import SlotCalendar
from ..models.subject import Subject
from ..models.timetable import Grid, parse_grid

logger = logging.getLogger(__name__)


class GenerationGateway(Protocol):
    """External generator: catalog in, day-keyed grid JSON (text or object) out.

    Implementations raise ServiceUnavailable when no payload could be produced.
    """

    def generate(self, subjects: Sequence[Subject]) -> Any: ...


class OfflineGateway:
    def generate(self, subjects: Sequence[Subject]) -> Any:
        raise ServiceUnavailable("No generation service configured")


class FileGateway:
    """Replays a response produced earlier by the generation service."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def generate(self, subjects: Sequence[Subject]) -> Any:
        if not self.path.exists():
            raise ServiceUnavailable(f"Response file not found: {self.path}")
        return self.path.read_text(encoding="utf-8")


class CommandGateway:
    """Runs an external generator command.

    The catalog is written to the command's stdin as a JSON array of subject
    records; the command prints the generated timetable JSON on stdout.
    """

    def __init__(self, command: List[str], timeout: float | None = 120.0):
        self.command = list(command)
        self.timeout = timeout

    def generate(self, subjects: Sequence[Subject]) -> Any:
        body = json.dumps([s.to_dict() for s in subjects], indent=2)
        try:
            proc = subprocess.run(
                self.command,
                input=body,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=True,
            )
        except FileNotFoundError as e:
            raise ServiceUnavailable(f"Generator command not found: {self.command[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise ServiceUnavailable(f"Generator timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            logger.warning(f"Generator stderr: {e.stderr.strip() if e.stderr else ''}")
            raise ServiceUnavailable(f"Generator exited with status {e.returncode}") from e
        if not proc.stdout.strip():
            raise ServiceUnavailable("Received an empty response from the generator")
        return proc.stdout


def parse_generated(payload: Any, calendar: SlotCalendar) -> Grid:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedResponse(f"Generator returned invalid JSON: {e}") from e
    return parse_grid(payload, calendar)
