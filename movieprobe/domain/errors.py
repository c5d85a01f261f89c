# movieprobe/domain/errors.py
from __future__ import annotations

from typing import Optional


class MovieProbeError(Exception):
    """Base class for fatal probe failures."""


class ResourceNotFound(MovieProbeError):
    """Local file missing, or remote resource unreachable / non-success."""

    def __init__(self, path: str, reason: str, status_code: Optional[int] = None):
        self.path = path
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{reason}: {path}" if status_code is None else f"{reason}: {path} (response code: {status_code})")


class ProbeOutputUnparsable(MovieProbeError):
    """The probe's structured output could not be decoded."""

    def __init__(self, raw_output: str, detail: str = ""):
        self.raw_output = raw_output
        self.detail = detail
        msg = "Could not parse output from ffprobe"
        if detail:
            msg += f" ({detail})"
        super().__init__(f"{msg}:\n{raw_output}")


class TooManyRedirects(MovieProbeError):
    def __init__(self, url: str, max_redirects: int):
        self.url = url
        self.max_redirects = max_redirects
        super().__init__(f"more than {max_redirects} redirects while checking {url}")


class ProbeExecutionError(MovieProbeError):
    """The probe binary itself could not be run (missing, OS error, timeout)."""

    def __init__(self, message: str, stderr: Optional[str] = None, rc: Optional[int] = None):
        self.message = message
        self.stderr = stderr
        self.rc = rc
        super().__init__(message)
