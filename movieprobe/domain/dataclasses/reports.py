# movieprobe/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from movieprobe.domain.entities.movie import Movie


@dataclass
class ProbeReport:
    """Outcome of a batch probe.
    - timing: started_at / finished_at
    - movies: one entry per input, in input order (None where probing failed)
    - error_details: (path, message) for every fatal per-item failure
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    movies: List[Optional[Movie]] = field(default_factory=list)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    @property
    def valid(self) -> int:
        return sum(1 for m in self.movies if m is not None and m.valid)

    @property
    def invalid(self) -> int:
        return sum(1 for m in self.movies if m is not None and not m.valid)

    @property
    def failed(self) -> int:
        return len(self.error_details)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "valid": self.valid,
            "invalid": self.invalid,
            "failed": self.failed,
            "movies": [
                None if m is None else {"path": m.path, "valid": m.valid, "duration": m.duration}
                for m in self.movies
            ],
            "error_details": [list(e) for e in self.error_details],
        }
