# movieprobe/common/probe/ffprobe_helpers.py
from __future__ import annotations

from fractions import Fraction
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Tuple


def build_ffprobe_cmd(
    input_path: str | Path,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "info",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build the ffprobe command emitting format, streams and error as one JSON document.
    Diagnostics (unsupported codecs etc.) go to stderr at `log_level`.
    """
    if isinstance(input_path, Path):
        input_path = str(input_path)
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        "-show_error",
    ]
    if extra_args:
        base += list(extra_args)
    return base + ["-i", input_path]


def decode_output(raw: bytes | str | None) -> str:
    """
    Decode probe output as UTF-8; fall back to ISO-8859-1 so text scanning never fails.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("iso-8859-1")


# ---- tiny coercion helpers ----------------------------------------------------
def to_int(x: Any, default: int = 0) -> int:
    if x is None or isinstance(x, bool):
        return default
    try:
        return int(float(x))
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(x: Any, default: float = 0.0) -> float:
    if x is None or isinstance(x, bool):
        return default
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def parse_ratio(ratio: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    "16:9" -> (16.0, 9.0). Absent, malformed or zero components -> None.
    """
    if not ratio or ":" not in ratio:
        return None
    w, h = ratio.split(":", 1)
    if w.strip() == "0" or h.strip() == "0":
        return None
    try:
        fw, fh = float(w), float(h)
    except ValueError:
        return None
    if fw == 0 or fh == 0:
        return None
    return fw, fh


def parse_frame_rate(rate: Optional[str]) -> Optional[Fraction]:
    """
    "30000/1001" -> Fraction(30000, 1001). "0/0" means unknown -> None.
    """
    if not rate:
        return None
    try:
        fr = Fraction(str(rate).strip())
    except (ValueError, ZeroDivisionError):
        return None
    return fr


def get_tag(tags: Mapping[str, Any] | None, key: str) -> Optional[str]:
    if not tags or not isinstance(tags, Mapping):
        return None
    val = tags.get(key)
    return str(val) if val is not None else None
