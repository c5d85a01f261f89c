# tests/conftest.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from movieprobe.common import settings as settings_mod
from movieprobe.domain.dataclasses.probe import RawProbeOutput


@pytest.fixture(autouse=True)
def _fresh_settings():
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


def _video(**overrides: Any) -> Dict[str, Any]:
    s = {
        "index": 0,
        "codec_type": "video",
        "codec_name": "h264",
        "profile": "High",
        "codec_tag_string": "avc1",
        "codec_tag": "0x31637661",
        "pix_fmt": "yuv420p",
        "width": 1920,
        "height": 1080,
        "sample_aspect_ratio": "1:1",
        "display_aspect_ratio": "16:9",
        "avg_frame_rate": "30000/1001",
        "bit_rate": "4000000",
    }
    s.update(overrides)
    return s


def _audio(**overrides: Any) -> Dict[str, Any]:
    s = {
        "index": 1,
        "codec_type": "audio",
        "codec_name": "aac",
        "codec_tag_string": "mp4a",
        "codec_tag": "0x6134706d",
        "sample_fmt": "fltp",
        "sample_rate": "48000",
        "channels": 2,
        "channel_layout": "stereo",
        "bit_rate": "128000",
        "tags": {"language": "eng"},
    }
    s.update(overrides)
    return s


def _document(streams: Optional[List[Dict[str, Any]]] = None, **fmt_overrides: Any) -> Dict[str, Any]:
    fmt = {
        "filename": "clip.mp4",
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "duration": "12.345000",
        "start_time": "0.021333",
        "bit_rate": "4128000",
        "size": "6370000",
        "tags": {"creation_time": "2021-06-01T10:20:30.000000Z", "encoder": "Lavf58.76.100"},
    }
    fmt.update(fmt_overrides)
    return {"streams": [_video(), _audio()] if streams is None else streams, "format": fmt}


ERROR_DOCUMENT = {"error": {"code": -1094995529, "string": "Invalid data found when processing input"}}


class FFprobeJSON:
    """Builders for ffprobe-shaped JSON documents and raw outputs."""
    video = staticmethod(_video)
    audio = staticmethod(_audio)
    document = staticmethod(_document)
    error_document = ERROR_DOCUMENT

    @staticmethod
    def output(doc: Dict[str, Any] | str | bytes, stderr: str | bytes = b"", returncode: int = 0) -> RawProbeOutput:
        if isinstance(doc, dict):
            doc = json.dumps(doc)
        if isinstance(doc, str):
            doc = doc.encode("utf-8")
        if isinstance(stderr, str):
            stderr = stderr.encode("utf-8")
        return RawProbeOutput(stdout=doc, stderr=stderr, returncode=returncode)


@pytest.fixture()
def ffjson() -> type[FFprobeJSON]:
    return FFprobeJSON


class FakeInvoker:
    """ProbeInvokerPort returning queued outputs; the last one repeats."""

    def __init__(self, *outputs: RawProbeOutput):
        self.outputs = list(outputs)
        self.calls: List[str] = []

    def run(self, path) -> RawProbeOutput:
        self.calls.append(str(path))
        idx = min(len(self.calls), len(self.outputs)) - 1
        return self.outputs[idx]


@pytest.fixture()
def fake_invoker():
    return FakeInvoker


@pytest.fixture()
def media_file(tmp_path):
    p = tmp_path / "clip.mp4"
    p.write_bytes(b"\x00" * 2048)
    return p
