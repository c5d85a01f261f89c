from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol
from movieprobe.domain.dataclasses.probe import RawProbeOutput, RemoteHead

class ProbeInvokerPort(Protocol):
    def run(self, path: str | Path) -> RawProbeOutput: ...

class RemoteCheckPort(Protocol):
    def head(self, url: str) -> Optional[RemoteHead]: ...
