# hexprobe/services/probe/batch.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from hexprobe.common.concurrency.thread_manager import ThreadManager
from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.dataclasses.reports import ProbeReport
from hexprobe.domain.entities.probe import ProbeResult
from hexprobe.domain.enums.media_type import MediaType
from hexprobe.domain.errors import MediaError, NotFoundError
from hexprobe.domain.ports.probe import MediaProbePort

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchItem:
    path: Path
    result: Optional[ProbeResult] = None
    error: Optional[MediaError] = None


class ProbeBatchService:
    """
    Probe many files concurrently. Each path is independent; one failure is
    recorded in the report and does not stop the others.
    """

    def __init__(self, prober: MediaProbePort, max_workers: Optional[int] = None):
        cfg = get_settings()
        self.prober = prober
        self.max_workers = max_workers or cfg.concurrency.probe_workers
        self.max_queue = cfg.concurrency.thread_queue_maxsize

    def _probe_one(self, path: Path) -> BatchItem:
        try:
            return BatchItem(path=path, result=self.prober.probe(path))
        except MediaError as e:
            return BatchItem(path=path, error=e)

    def run(self, paths: Iterable[Path | str]) -> Tuple[List[BatchItem], ProbeReport]:
        items = [Path(p) for p in paths]
        report = ProbeReport(planned=len(items))
        report.start()
        with ThreadManager(name="probe", max_workers=self.max_workers, max_queue=self.max_queue) as tm:
            results = tm.map(self._probe_one, items)
        for item in results:
            self._tally(report, item)
        report.stop()
        logger.info(
            "batch probe: planned=%d ok=%d degraded=%d unsupported=%d missing=%d errors=%d",
            report.planned, report.probed_ok, report.degraded, report.not_supported,
            report.missing_files, report.errors,
        )
        return results, report

    @staticmethod
    def _tally(report: ProbeReport, item: BatchItem) -> None:
        if item.error is not None:
            if isinstance(item.error, NotFoundError):
                report.missing_files += 1
            else:
                report.errors += 1
                logger.warning("probe failed for %s: %s", item.path, item.error)
            report.add_error(str(item.path), item.error.message)
            return
        result = item.result
        if result.media_type == MediaType.UNKNOWN:
            report.not_supported += 1
        elif result.is_degraded:
            report.degraded += 1
        else:
            report.probed_ok += 1
