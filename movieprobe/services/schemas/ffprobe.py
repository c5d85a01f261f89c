# movieprobe/services/schemas/ffprobe.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ffprobe prints most numbers as strings ("48000", "1.500000"); keep them raw
Numberish = Optional[Union[int, float, str]]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class FormatSection(_Lenient):
    filename: Optional[str] = None
    format_name: Optional[str] = None
    format_long_name: Optional[str] = None
    duration: Numberish = None
    start_time: Numberish = None
    bit_rate: Numberish = None
    size: Numberish = None
    nb_streams: Optional[int] = None
    tags: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or {}


class StreamSection(_Lenient):
    index: Optional[int] = None
    codec_type: Optional[str] = None
    codec_name: Optional[str] = None
    profile: Optional[Union[str, int]] = None
    codec_tag_string: Optional[str] = None
    codec_tag: Optional[str] = None

    # video
    pix_fmt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    sample_aspect_ratio: Optional[str] = None
    display_aspect_ratio: Optional[str] = None
    avg_frame_rate: Optional[str] = None
    r_frame_rate: Optional[str] = None
    side_data_list: List[Dict[str, Any]] = Field(default_factory=list)

    # audio
    channels: Numberish = None
    sample_rate: Numberish = None
    sample_fmt: Optional[str] = None
    channel_layout: Optional[str] = None

    bit_rate: Numberish = None
    tags: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v or {}

    @field_validator("side_data_list", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []


class ErrorSection(_Lenient):
    code: Optional[int] = None
    string: Optional[str] = None


class ProbeDocument(_Lenient):
    """Top-level ffprobe JSON: `-show_format -show_streams -show_error`."""
    format: Optional[FormatSection] = None
    streams: List[StreamSection] = Field(default_factory=list)
    error: Optional[ErrorSection] = None

    @field_validator("streams", mode="before")
    @classmethod
    def _none_to_list(cls, v):
        return v or []

    @property
    def has_error(self) -> bool:
        """True iff the probe emitted a top-level `error` key."""
        return "error" in self.model_fields_set
