# movieprobe/services/probe/ffprobe_adapter.py
from __future__ import annotations

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from movieprobe.common.logging import get_logger
from movieprobe.common.probe.ffprobe_helpers import build_ffprobe_cmd, decode_output
from movieprobe.common.settings import get_settings
from movieprobe.domain.dataclasses.probe import RawProbeOutput
from movieprobe.domain.errors import ProbeExecutionError
from movieprobe.domain.ports.probe import ProbeInvokerPort

logger = get_logger()


class FFprobeAdapter(ProbeInvokerPort):
    """
    Infrastructure adapter implementing ProbeInvokerPort using `ffprobe`.
    Returns stdout/stderr untouched; a non-zero exit code is not an error here
    because the JSON body carries ffprobe's own `error` section.
    Safe to share between threads.
    """

    def __init__(
        self,
        ffprobe_bin: Optional[str] = None,
        timeout_sec: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        cfg = get_settings().ffprobe
        candidate = ffprobe_bin or cfg.bin
        if not candidate or candidate == "ffprobe":
            # resolve absolute path for nicer errors
            resolved = shutil.which(candidate or "ffprobe")
            if not resolved:
                raise ProbeExecutionError("ffprobe not found on PATH; set FFPROBE__BIN or install ffmpeg.")
            candidate = resolved

        self.ffprobe_bin = candidate
        self.timeout_sec = int(timeout_sec or cfg.timeout_sec or 30)
        self.log_level = log_level or cfg.log_level

    # ---- Port API -------------------------------------------------------------
    def run(self, path: str | Path) -> RawProbeOutput:
        if not path:
            raise ProbeExecutionError("No path provided to run().")

        cmd = build_ffprobe_cmd(path, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout_sec,
                check=False,  # ffprobe reports failures in its JSON
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeExecutionError(f"ffprobe timed out after {self.timeout_sec}s", stderr=str(e)) from e
        except OSError as e:
            raise ProbeExecutionError("Failed to execute ffprobe (OS error).", stderr=str(e)) from e

        if proc.returncode != 0:
            logger.debug(
                "ffprobe exited with %s for %s: %s",
                proc.returncode, path, decode_output(proc.stderr).strip()[-500:],
            )

        return RawProbeOutput(stdout=proc.stdout or b"", stderr=proc.stderr or b"", returncode=proc.returncode)
