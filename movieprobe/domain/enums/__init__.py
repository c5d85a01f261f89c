from movieprobe.domain.enums.codec_type import CodecType
from movieprobe.domain.enums.filter_preset import FilterPreset
__all__ = [
    "CodecType",
    "FilterPreset",
]
