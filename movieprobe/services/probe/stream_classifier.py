# movieprobe/services/probe/stream_classifier.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from movieprobe.common.probe.ffprobe_helpers import parse_frame_rate, to_int
from movieprobe.domain.entities.streams import AudioStream, VideoStream
from movieprobe.domain.enums.codec_type import CodecType
from movieprobe.services.schemas.ffprobe import StreamSection


def _str_or_none(x) -> Optional[str]:
    return None if x is None else str(x)


class StreamClassifier:
    """
    Partition probe streams into the primary video stream (first one wins)
    and the ordered audio streams (first is primary).
    """

    def classify(self, streams: Iterable[StreamSection]) -> Tuple[Optional[VideoStream], List[AudioStream]]:
        streams = list(streams)
        vstreams = [s for s in streams if s.codec_type == CodecType.video]
        astreams = [s for s in streams if s.codec_type == CodecType.audio]

        video = self.video_from(vstreams[0]) if vstreams else None
        audio = [self.audio_from(s) for s in astreams]
        return video, audio

    def video_from(self, s: StreamSection) -> VideoStream:
        return VideoStream(
            index=s.index,
            codec_name=s.codec_name,
            profile=_str_or_none(s.profile),
            codec_tag_string=s.codec_tag_string,
            codec_tag=s.codec_tag,
            pixel_format=s.pix_fmt,
            sample_aspect_ratio=s.sample_aspect_ratio,
            display_aspect_ratio=s.display_aspect_ratio,
            reported_width=s.width,
            stored_height=s.height,
            bitrate=to_int(s.bit_rate),
            frame_rate=parse_frame_rate(s.avg_frame_rate),
            rotation=self.rotation_of(s),
        )

    def audio_from(self, s: StreamSection) -> AudioStream:
        return AudioStream(
            index=s.index,
            channels=to_int(s.channels),
            codec_name=s.codec_name,
            sample_rate=to_int(s.sample_rate),
            bitrate=to_int(s.bit_rate),
            channel_layout=s.channel_layout,
            sample_format=s.sample_fmt,
            codec_tag_string=s.codec_tag_string,
            codec_tag=s.codec_tag,
            tags=dict(s.tags),
        )

    @staticmethod
    def rotation_of(s: StreamSection) -> Optional[int]:
        """
        `tags.rotate` (older ffmpeg), else the first side-data entry's `rotation`
        (display matrix, newer ffmpeg). None when neither is reported.
        """
        if "rotate" in s.tags:
            return to_int(s.tags["rotate"])
        if s.side_data_list and "rotation" in s.side_data_list[0]:
            return to_int(s.side_data_list[0]["rotation"])
        return None
