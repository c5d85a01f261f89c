from fractions import Fraction

import pytest

from movieprobe.common.probe.ffprobe_helpers import (
    build_ffprobe_cmd,
    decode_output,
    get_tag,
    parse_frame_rate,
    parse_ratio,
    to_float,
    to_int,
)


def test_build_ffprobe_cmd_uses_json_flags(tmp_path):
    f = tmp_path / "video.mp4"
    cmd = build_ffprobe_cmd(f)
    assert "ffprobe" in cmd[0].lower()
    # Core JSON flags we rely on
    for flag in ("-show_streams", "-show_format", "-show_error"):
        assert flag in cmd
    assert cmd[cmd.index("-print_format") + 1] == "json"
    assert cmd[-2:] == ["-i", str(f)]


def test_build_ffprobe_cmd_log_level_and_binary():
    cmd = build_ffprobe_cmd("in.mkv", ffprobe_bin="/opt/ff/ffprobe", log_level="warning", extra_args=["-hide_banner"])
    assert cmd[0] == "/opt/ff/ffprobe"
    assert cmd[cmd.index("-v") + 1] == "warning"
    assert "-hide_banner" in cmd
    assert cmd[-1] == "in.mkv"


def test_decode_output_falls_back_to_latin1():
    assert decode_output(b"caf\xc3\xa9") == "café"
    assert decode_output(b"caf\xe9") == "café"
    assert decode_output(None) == ""
    assert decode_output("already text") == "already text"


@pytest.mark.parametrize(
    "raw, expected",
    [("128000", 128000), ("12.9", 12), (64, 64), ("N/A", 0), (None, 0), ("", 0)],
)
def test_to_int(raw, expected):
    assert to_int(raw) == expected


def test_to_float():
    assert to_float("12.345000") == pytest.approx(12.345)
    assert to_float(None) == 0.0
    assert to_float("N/A") == 0.0


@pytest.mark.parametrize(
    "ratio, expected",
    [
        ("16:9", (16.0, 9.0)),
        ("4:3", (4.0, 3.0)),
        ("0:1", None),
        ("4:0", None),
        ("garbage", None),
        ("a:b", None),
        (None, None),
        ("", None),
    ],
)
def test_parse_ratio(ratio, expected):
    assert parse_ratio(ratio) == expected


def test_parse_frame_rate():
    assert parse_frame_rate("30000/1001") == Fraction(30000, 1001)
    assert parse_frame_rate("25/1") == 25
    assert parse_frame_rate("0/0") is None
    assert parse_frame_rate("30/0") is None
    assert parse_frame_rate("bogus") is None
    assert parse_frame_rate(None) is None


def test_get_tag():
    assert get_tag({"rotate": 90}, "rotate") == "90"
    assert get_tag({}, "rotate") is None
    assert get_tag(None, "rotate") is None
