from __future__ import annotations

from fractions import Fraction

from movieprobe.services.probe.stream_classifier import StreamClassifier
from movieprobe.services.schemas.ffprobe import StreamSection


def _sections(*raw):
    return [StreamSection.model_validate(s) for s in raw]


def test_first_video_wins_and_all_audio_kept(ffjson):
    streams = _sections(
        ffjson.audio(index=0, codec_name="aac"),
        ffjson.video(index=1, codec_name="h264"),
        {"index": 2, "codec_type": "subtitle", "codec_name": "mov_text"},
        ffjson.audio(index=3, codec_name="ac3", channels=6, channel_layout="5.1(side)"),
        ffjson.video(index=4, codec_name="mjpeg"),
    )
    video, audio = StreamClassifier().classify(streams)

    assert video.index == 1
    assert video.codec_name == "h264"
    assert [a.index for a in audio] == [0, 3]
    assert audio[1].channels == 6
    assert audio[1].channel_layout == "5.1(side)"


def test_no_streams(ffjson):
    video, audio = StreamClassifier().classify([])
    assert video is None
    assert audio == []


def test_video_fields(ffjson):
    (s,) = _sections(ffjson.video())
    v = StreamClassifier().video_from(s)
    assert v.pixel_format == "yuv420p"
    assert v.profile == "High"
    assert v.bitrate == 4_000_000
    assert v.frame_rate == Fraction(30000, 1001)
    assert (v.reported_width, v.stored_height) == (1920, 1080)
    assert v.rotation is None


def test_zero_over_zero_frame_rate_is_absent(ffjson):
    (s,) = _sections(ffjson.video(avg_frame_rate="0/0"))
    assert StreamClassifier().video_from(s).frame_rate is None


def test_rotation_from_tag(ffjson):
    (s,) = _sections(ffjson.video(tags={"rotate": "-90"}))
    assert StreamClassifier.rotation_of(s) == -90


def test_rotation_from_side_data(ffjson):
    (s,) = _sections(
        ffjson.video(side_data_list=[{"side_data_type": "Display Matrix", "rotation": 90}, {"rotation": 180}])
    )
    assert StreamClassifier.rotation_of(s) == 90


def test_rotation_tag_preferred_over_side_data(ffjson):
    (s,) = _sections(ffjson.video(tags={"rotate": "270"}, side_data_list=[{"rotation": -90}]))
    assert StreamClassifier.rotation_of(s) == 270


def test_explicit_zero_rotation_is_not_absent(ffjson):
    (s,) = _sections(ffjson.video(tags={"rotate": "0"}))
    assert StreamClassifier.rotation_of(s) == 0


def test_side_data_without_rotation(ffjson):
    (s,) = _sections(ffjson.video(side_data_list=[{"side_data_type": "CPB properties"}]))
    assert StreamClassifier.rotation_of(s) is None


def test_audio_numeric_coercion(ffjson):
    (s,) = _sections(ffjson.audio(bit_rate="N/A", sample_rate="44100", channels="2", channel_layout=None))
    a = StreamClassifier().audio_from(s)
    assert a.bitrate == 0
    assert a.sample_rate == 44100
    assert a.channels == 2
    assert a.channel_layout is None


def test_audio_missing_bitrate_is_zero(ffjson):
    raw = ffjson.audio()
    raw.pop("bit_rate")
    (s,) = _sections(raw)
    a = StreamClassifier().audio_from(s)
    assert a.bitrate == 0
    assert a.tags == {"language": "eng"}
