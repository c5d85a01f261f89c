# movieprobe/domain/policies/validity.py
from __future__ import annotations

import re
from typing import Optional, Protocol, Set, Union

from movieprobe.domain.entities.streams import AudioStream, VideoStream

UNSUPPORTED_CODEC_PATTERN = re.compile(r"^Unsupported codec with id (\d+) for input stream (\d+)$")
CODEC_PARAMETERS_MARKER = "could not find codec parameters"

# one probe plus one retry on a structured error
MAX_PROBE_ATTEMPTS = 2


class DiagnosticScanner(Protocol):
    def unsupported_stream_indices(self, text: str) -> Set[int]: ...
    def has_codec_parameter_error(self, text: str) -> bool: ...


class FFprobeDiagnostics:
    """Free-text scanning of ffprobe stderr."""

    def unsupported_stream_indices(self, text: str) -> Set[int]:
        indices: Set[int] = set()
        for line in (text or "").splitlines():
            m = UNSUPPORTED_CODEC_PATTERN.match(line.strip())
            if m:
                indices.add(int(m.group(2)))
        return indices

    def has_codec_parameter_error(self, text: str) -> bool:
        return CODEC_PARAMETERS_MARKER in (text or "")


class ValidityDeterminer:
    """
    Decides whether a probed resource is usable.

    Invalid when the probe reported a top-level error, when the diagnostics say
    codec parameters could not be found, or when both the primary video and
    primary audio stream are disqualified (absent, or flagged unsupported).
    """

    def __init__(self, scanner: Optional[DiagnosticScanner] = None):
        self.scanner: DiagnosticScanner = scanner or FFprobeDiagnostics()

    def should_retry(self, has_error: bool, attempt: int) -> bool:
        """`attempt` is 1-based."""
        return has_error and attempt < MAX_PROBE_ATTEMPTS

    def is_valid(
        self,
        *,
        has_error: bool,
        diagnostics: str,
        video: Optional[VideoStream],
        audio: Optional[AudioStream],
    ) -> bool:
        unsupported = self.scanner.unsupported_stream_indices(diagnostics)

        def _disqualified(stream: Optional[Union[VideoStream, AudioStream]]) -> bool:
            return stream is None or stream.index in unsupported

        if _disqualified(video) and _disqualified(audio):
            return False
        if has_error:
            return False
        if self.scanner.has_codec_parameter_error(diagnostics):
            return False
        return True
