# movieprobe/services/probe/metadata_parser.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import ValidationError

from movieprobe.common.logging import get_logger
from movieprobe.common.probe.ffprobe_helpers import decode_output
from movieprobe.domain.dataclasses.probe import RawProbeOutput
from movieprobe.domain.errors import ProbeOutputUnparsable
from movieprobe.services.schemas.ffprobe import ProbeDocument

logger = get_logger()


@dataclass(frozen=True)
class ParsedProbe:
    document: ProbeDocument
    diagnostics: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def has_error(self) -> bool:
        return self.document.has_error


class MetadataParser:
    """
    Decode ffprobe stdout into a ProbeDocument; stderr is decoded alongside
    for free-text diagnostics.
    """

    def parse(self, output: RawProbeOutput) -> ParsedProbe:
        stdout = decode_output(output.stdout)
        stderr = decode_output(output.stderr)

        try:
            data = json.loads(stdout or "{}")
        except json.JSONDecodeError as e:
            logger.debug("ffprobe stdout is not JSON: %s", e)
            raise ProbeOutputUnparsable(stdout, str(e)) from e
        if not isinstance(data, dict):
            raise ProbeOutputUnparsable(stdout, "top-level value is not an object")

        try:
            document = ProbeDocument.model_validate(data)
        except ValidationError as e:
            raise ProbeOutputUnparsable(stdout, f"{e.error_count()} validation error(s)") from e

        return ParsedProbe(document=document, diagnostics=stderr, raw=data)
