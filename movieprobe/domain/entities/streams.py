# movieprobe/domain/entities/streams.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, Optional

from movieprobe.common.probe.ffprobe_helpers import parse_ratio


def _s(x: Any) -> str:
    return "" if x is None else str(x)


@dataclass(frozen=True)
class VideoStream:
    """
    The primary video stream of a probed resource.

    `reported_width`/`stored_height` are the probe's raw values. Every
    dimension read goes through `width`/`height`, which are display-oriented:
    a quarter-turn rotation (|rotation| in {90, 270}) swaps them.
    `rotation` is None when the probe did not report one, which is not the
    same as an explicit 0.
    """
    index: Optional[int] = None
    codec_name: Optional[str] = None
    profile: Optional[str] = None
    codec_tag_string: Optional[str] = None
    codec_tag: Optional[str] = None
    pixel_format: Optional[str] = None
    sample_aspect_ratio: Optional[str] = None
    display_aspect_ratio: Optional[str] = None
    reported_width: Optional[int] = None
    stored_height: Optional[int] = None
    bitrate: int = 0
    frame_rate: Optional[Fraction] = None
    rotation: Optional[int] = None

    # ---- geometry ---------------------------------------------------------------
    @property
    def stored_width(self) -> Optional[int]:
        """Width implied by the DAR when one is reported, else the raw width."""
        dar = parse_ratio(self.display_aspect_ratio)
        if dar is None or self.stored_height is None:
            return self.reported_width
        w, h = dar
        return int(round(self.stored_height * (w / h)))

    @property
    def is_quarter_turn(self) -> bool:
        return self.rotation is not None and abs(self.rotation) in (90, 270)

    @property
    def width(self) -> Optional[int]:
        return self.stored_height if self.is_quarter_turn else self.stored_width

    @property
    def height(self) -> Optional[int]:
        return self.stored_width if self.is_quarter_turn else self.stored_height

    @property
    def resolution(self) -> Optional[str]:
        w, h = self.width, self.height
        if w is None or h is None:
            return None
        return f"{w}x{h}"

    # ---- aspect ratios ------------------------------------------------------------
    def _aspect(self, ratio: Optional[str]) -> Optional[float]:
        parsed = parse_ratio(ratio)
        if parsed is None:
            return None
        w, h = parsed
        return h / w if self.is_quarter_turn else w / h

    @property
    def calculated_aspect_ratio(self) -> Optional[float]:
        aspect = self._aspect(self.display_aspect_ratio)
        if aspect is not None:
            return aspect
        w, h = self.width, self.height
        if w is None or not h:
            return None
        aspect = w / h
        return None if math.isnan(aspect) else aspect

    @property
    def calculated_pixel_aspect_ratio(self) -> float:
        aspect = self._aspect(self.sample_aspect_ratio)
        return 1.0 if aspect is None else aspect

    # ---- display ------------------------------------------------------------------
    @property
    def overview(self) -> str:
        return (
            f"{_s(self.codec_name)} ({_s(self.profile)}) "
            f"({_s(self.codec_tag_string)} / {_s(self.codec_tag)}), "
            f"{_s(self.pixel_format)}, {_s(self.resolution)} "
            f"[SAR {_s(self.sample_aspect_ratio)} DAR {_s(self.display_aspect_ratio)}]"
        )


@dataclass(frozen=True)
class AudioStream:
    index: Optional[int] = None
    channels: int = 0
    codec_name: Optional[str] = None
    sample_rate: int = 0
    bitrate: int = 0
    channel_layout: Optional[str] = None
    sample_format: Optional[str] = None
    codec_tag_string: Optional[str] = None
    codec_tag: Optional[str] = None
    tags: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def overview(self) -> str:
        return (
            f"{_s(self.codec_name)} ({_s(self.codec_tag_string)} / {_s(self.codec_tag)}), "
            f"{self.sample_rate} Hz, {_s(self.channel_layout)}, "
            f"{_s(self.sample_format)}, {self.bitrate} bit/s"
        )
