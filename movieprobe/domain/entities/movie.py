# movieprobe/domain/entities/movie.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from fractions import Fraction
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from movieprobe.domain.dataclasses.probe import RemoteHead
from movieprobe.domain.entities.streams import AudioStream, VideoStream
from movieprobe.domain.ports.transcode import TranscoderFactory

_REMOTE_RE = re.compile(r"^https?://", re.IGNORECASE)

# Older ffprobe builds omit channel_layout; infer it from the channel count (1 -> "stereo" too).
LEGACY_CHANNEL_LAYOUTS: Dict[int, str] = {1: "stereo", 2: "stereo", 6: "5.1"}


def is_remote_path(path: str | Path) -> bool:
    return bool(_REMOTE_RE.match(str(path)))


@dataclass(frozen=True)
class Movie:
    """
    Normalized, immutable result of probing one media resource.
    Built by MovieProber; `valid` is decided once at construction.
    """
    path: str
    duration: float = 0.0
    start_time: float = 0.0
    bitrate: int = 0
    creation_time: Optional[datetime] = None
    container: Optional[str] = None
    format_tags: Optional[Dict[str, Any]] = field(default=None, hash=False)
    video: Optional[VideoStream] = None
    audio_streams: Tuple[AudioStream, ...] = ()
    valid: bool = True

    # Raw decoded probe output, kept for diagnostics
    metadata: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False, hash=False)
    remote_head: Optional[RemoteHead] = field(default=None, repr=False, compare=False)
    transcoder_factory: Optional[TranscoderFactory] = field(default=None, repr=False, compare=False)

    # ---- location -----------------------------------------------------------------
    @property
    def is_remote(self) -> bool:
        return is_remote_path(self.path)

    @property
    def is_local(self) -> bool:
        return not self.is_remote

    @property
    def size(self) -> Optional[int]:
        """
        Bytes on disk for local files, read live on every access (raises
        FileNotFoundError if the file was removed after probing).
        Content-Length from the construction-time existence check for URLs.
        """
        if self.is_local:
            return Path(self.path).stat().st_size
        return self.remote_head.content_length if self.remote_head else None

    @property
    def time(self) -> float:
        return self.start_time

    # ---- video --------------------------------------------------------------------
    @property
    def video_stream(self) -> Optional[str]:
        return self.video.overview if self.video else None

    @property
    def video_codec(self) -> Optional[str]:
        return self.video.codec_name if self.video else None

    @property
    def colorspace(self) -> Optional[str]:
        return self.video.pixel_format if self.video else None

    @property
    def sar(self) -> Optional[str]:
        return self.video.sample_aspect_ratio if self.video else None

    @property
    def dar(self) -> Optional[str]:
        return self.video.display_aspect_ratio if self.video else None

    @property
    def frame_rate(self) -> Optional[Fraction]:
        return self.video.frame_rate if self.video else None

    @property
    def rotation(self) -> Optional[int]:
        return self.video.rotation if self.video else None

    @property
    def video_bitrate(self) -> Optional[int]:
        return self.video.bitrate if self.video else None

    @property
    def width(self) -> Optional[int]:
        return self.video.width if self.video else None

    @property
    def height(self) -> Optional[int]:
        return self.video.height if self.video else None

    @property
    def resolution(self) -> Optional[str]:
        return self.video.resolution if self.video else None

    @property
    def calculated_aspect_ratio(self) -> Optional[float]:
        return self.video.calculated_aspect_ratio if self.video else None

    @property
    def calculated_pixel_aspect_ratio(self) -> float:
        return self.video.calculated_pixel_aspect_ratio if self.video else 1.0

    # ---- audio (primary stream) ------------------------------------------------------
    @property
    def primary_audio(self) -> Optional[AudioStream]:
        return self.audio_streams[0] if self.audio_streams else None

    @property
    def audio_stream(self) -> Optional[str]:
        a = self.primary_audio
        return a.overview if a else None

    @property
    def audio_codec(self) -> Optional[str]:
        a = self.primary_audio
        return a.codec_name if a else None

    @property
    def audio_bitrate(self) -> Optional[int]:
        a = self.primary_audio
        return a.bitrate if a else None

    @property
    def audio_sample_rate(self) -> Optional[int]:
        a = self.primary_audio
        return a.sample_rate if a else None

    @property
    def audio_channels(self) -> Optional[int]:
        a = self.primary_audio
        return a.channels if a else None

    @property
    def audio_tags(self) -> Optional[Dict[str, Any]]:
        a = self.primary_audio
        return a.tags if a else None

    @property
    def audio_channel_layout(self) -> str:
        a = self.primary_audio
        if a is not None and a.channel_layout:
            return a.channel_layout
        return LEGACY_CHANNEL_LAYOUTS.get(self.audio_channels or 0, "unknown")

    # ---- transcoding bridge -------------------------------------------------------------
    def transcode(
        self,
        output_file: str | Path,
        options: Optional[Mapping[str, Any]] = None,
        transcoder_options: Optional[Mapping[str, Any]] = None,
        progress: Optional[Callable[[float], None]] = None,
    ) -> Any:
        if self.transcoder_factory is None:
            raise RuntimeError("No transcoder configured for this Movie.")
        transcoder = self.transcoder_factory(
            self, output_file, dict(options or {}), dict(transcoder_options or {})
        )
        return transcoder.run(progress)

    def screenshot(
        self,
        output_file: str | Path,
        options: Optional[Mapping[str, Any]] = None,
        transcoder_options: Optional[Mapping[str, Any]] = None,
        progress: Optional[Callable[[float], None]] = None,
    ) -> Any:
        merged = {**dict(options or {}), "screenshot": True}
        return self.transcode(output_file, merged, transcoder_options, progress)
