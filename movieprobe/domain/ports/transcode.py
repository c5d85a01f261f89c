from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from movieprobe.domain.entities.movie import Movie


class TranscoderPort(Protocol):
    def run(self, progress: Optional[Callable[[float], None]] = None) -> Any: ...


class TranscoderFactory(Protocol):
    def __call__(
        self,
        movie: "Movie",
        output_file: str | Path,
        options: Mapping[str, Any],
        transcoder_options: Mapping[str, Any],
    ) -> TranscoderPort: ...
