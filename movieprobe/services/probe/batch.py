# movieprobe/services/probe/batch.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional

from movieprobe.common.logging import get_logger
from movieprobe.common.settings import get_settings
from movieprobe.domain.dataclasses.reports import ProbeReport
from movieprobe.domain.entities.movie import Movie
from movieprobe.services.probe.movie_prober import MovieProber

logger = get_logger()


def probe_batch(
    paths: Iterable[str | Path],
    prober: Optional[MovieProber] = None,
    *,
    max_workers: Optional[int] = None,
) -> ProbeReport:
    """
    Probe many resources on a thread pool. Each probe is independent; any
    failure on one path is recorded on the report and the batch carries on.
    """
    items: List[str] = [str(p) for p in paths]
    prober = prober or MovieProber()
    workers = max_workers or get_settings().concurrency.probe_workers

    report = ProbeReport()
    report.start()

    def _one(path: str) -> Optional[Movie]:
        try:
            return prober.probe(path)
        except Exception as e:
            logger.exception("probe failed for %s", path)
            report.add_error(path, str(e) or type(e).__name__)
            return None

    if items:
        with ThreadPoolExecutor(max_workers=max(1, min(workers, len(items))), thread_name_prefix="probe") as pool:
            report.movies = list(pool.map(_one, items))

    report.stop()
    return report
