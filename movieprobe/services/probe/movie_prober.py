# movieprobe/services/probe/movie_prober.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from movieprobe.common.logging import get_logger
from movieprobe.common.probe.ffprobe_helpers import get_tag, to_float, to_int
from movieprobe.domain.dataclasses.probe import RemoteHead
from movieprobe.domain.entities.movie import Movie, is_remote_path
from movieprobe.domain.errors import ResourceNotFound
from movieprobe.domain.policies.validity import MAX_PROBE_ATTEMPTS, ValidityDeterminer
from movieprobe.domain.ports.probe import ProbeInvokerPort, RemoteCheckPort
from movieprobe.domain.ports.transcode import TranscoderFactory
from movieprobe.services.probe.metadata_parser import MetadataParser, ParsedProbe
from movieprobe.services.probe.stream_classifier import StreamClassifier

logger = get_logger()


def parse_creation_time(value: Optional[str]) -> Optional[datetime]:
    """Best-effort ISO-8601 parse of a `creation_time` tag."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


class MovieProber:
    """
    Probe one resource and build its Movie:
    existence check -> ffprobe -> parse -> classify -> validity.

    A structured ffprobe error triggers exactly one re-probe; if the second
    attempt still reports an error the Movie comes back with duration 0 and
    valid=False rather than raising.
    """

    def __init__(
        self,
        invoker: Optional[ProbeInvokerPort] = None,
        remote_checker: Optional[RemoteCheckPort] = None,
        parser: Optional[MetadataParser] = None,
        classifier: Optional[StreamClassifier] = None,
        determiner: Optional[ValidityDeterminer] = None,
        transcoder_factory: Optional[TranscoderFactory] = None,
    ):
        self._invoker = invoker
        self._remote_checker = remote_checker
        self.parser = parser or MetadataParser()
        self.classifier = classifier or StreamClassifier()
        self.determiner = determiner or ValidityDeterminer()
        self.transcoder_factory = transcoder_factory

    # default adapters are built on first use
    @property
    def invoker(self) -> ProbeInvokerPort:
        if self._invoker is None:
            from movieprobe.services.probe.ffprobe_adapter import FFprobeAdapter
            self._invoker = FFprobeAdapter()
        return self._invoker

    @property
    def remote_checker(self) -> RemoteCheckPort:
        if self._remote_checker is None:
            from movieprobe.services.http.remote_checker import RemoteResourceChecker
            self._remote_checker = RemoteResourceChecker()
        return self._remote_checker

    # ---- public ---------------------------------------------------------------
    def probe(self, path: str | Path) -> Movie:
        path = str(path)
        remote_head = self.check_exists(path)

        parsed = self._probe_with_retry(path)
        return self._build_movie(path, parsed, remote_head)

    def check_exists(self, path: str) -> Optional[RemoteHead]:
        if is_remote_path(path):
            head = self.remote_checker.head(path)
            if head is None:
                raise ResourceNotFound(path, "the URL does not exist or is not available (no response)")
            if not head.ok:
                raise ResourceNotFound(path, "the URL does not exist or is not available", head.status_code)
            return head
        if not Path(path).is_file():
            raise ResourceNotFound(path, "the file does not exist")
        return None

    # ---- internals ------------------------------------------------------------
    def _probe_with_retry(self, path: str) -> ParsedProbe:
        attempt = 0
        while True:
            attempt += 1
            parsed = self.parser.parse(self.invoker.run(path))
            if not self.determiner.should_retry(parsed.has_error, attempt):
                break
            err = parsed.document.error
            logger.warning(
                "ffprobe reported an error for %s (attempt %d/%d): %s",
                path, attempt, MAX_PROBE_ATTEMPTS, err.string if err else None,
            )
        return parsed

    def _build_movie(self, path: str, parsed: ParsedProbe, remote_head: Optional[RemoteHead]) -> Movie:
        doc = parsed.document
        common: dict[str, Any] = dict(
            path=path,
            metadata=parsed.raw,
            remote_head=remote_head,
            transcoder_factory=self.transcoder_factory,
        )

        if doc.has_error:
            logger.info("ffprobe still reports an error for %s; marking invalid", path)
            valid = self.determiner.is_valid(
                has_error=True, diagnostics=parsed.diagnostics, video=None, audio=None
            )
            return Movie(duration=0.0, valid=valid, **common)

        video, audio_streams = self.classifier.classify(doc.streams)
        valid = self.determiner.is_valid(
            has_error=False,
            diagnostics=parsed.diagnostics,
            video=video,
            audio=audio_streams[0] if audio_streams else None,
        )

        fmt = doc.format
        tags = dict(fmt.tags) if fmt and fmt.tags else None
        return Movie(
            duration=to_float(fmt.duration if fmt else None),
            start_time=to_float(fmt.start_time if fmt else None),
            bitrate=to_int(fmt.bit_rate if fmt else None),
            creation_time=parse_creation_time(get_tag(tags, "creation_time")),
            container=fmt.format_name if fmt else None,
            format_tags=tags,
            video=video,
            audio_streams=tuple(audio_streams),
            valid=valid,
            **common,
        )


def open_movie(path: str | Path, **kwargs: Any) -> Movie:
    """Shortcut for `MovieProber(**kwargs).probe(path)`."""
    return MovieProber(**kwargs).probe(path)
