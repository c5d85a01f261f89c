# movieprobe/domain/dataclasses/probe.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RawProbeOutput:
    """Complete, undecoded output of one probe run."""
    stdout: bytes = b""
    stderr: bytes = b""
    returncode: int = 0


@dataclass(frozen=True)
class RemoteHead:
    """Final (non-redirect) response of a remote existence check."""
    url: str
    status_code: int
    content_length: Optional[int] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
