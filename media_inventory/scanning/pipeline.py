#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Threaded scan -> extract -> write pipeline.

Scanners (one per root) feed a bounded queue consumed by a fixed pool of
extractor workers, which feed the CSV writer's bounded queue. Shutdown runs
in three phases and a queue is closed only after every producer writing to
it has been joined:

    scanning   -> join scanners,  close scan queue
    extracting -> join extractors, close record queue
    sinking    -> join writer
    done
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from threading import Thread
from typing import Dict, List, Optional, Sequence, Union

from ..config import ScanConfig
from ..models.file_record import FileRecord
from ..workqueue import WorkQueue
from ..writer import CSVWriter
from .discovery import RootScanner
from .extractor import FeatureExtractor

logger = logging.getLogger(__name__)

STAGES = ("idle", "scanning", "extracting", "sinking", "done")


@dataclass
class ScanSummary:
    """Outcome of one pipeline run."""
    output: str
    found: Dict[str, int] = field(default_factory=dict)
    failed_roots: List[str] = field(default_factory=list)
    written: int = 0
    elapsed: float = 0.0

    @property
    def total_found(self) -> int:
        return sum(self.found.values())

    def to_dict(self) -> dict:
        return {
            "output": self.output,
            "found": self.found,
            "total_found": self.total_found,
            "failed_roots": self.failed_roots,
            "written": self.written,
            "elapsed_seconds": round(self.elapsed, 3),
        }


class InventoryPipeline:
    """Runs the scanners, the extractor pool and the writer for one batch."""

    def __init__(self, roots: Sequence[Union[str, Path]], out_path: Union[str, Path],
                 config: Optional[ScanConfig] = None):
        self.roots = [Path(r) for r in roots]
        self.out_path = Path(out_path)
        self.config = config or ScanConfig()
        self.extractor = FeatureExtractor(self.config)
        self.stage = "idle"

    def _set_stage(self, stage: str):
        self.stage = stage
        logger.debug("Pipeline stage: %s", stage)

    def run(self) -> ScanSummary:
        """Run all three phases to completion.

        Raises OSError if the output file cannot be created; nothing is
        scanned in that case.
        """
        start = time.perf_counter()
        writer = CSVWriter(self.out_path, self.config)
        scan_q: "WorkQueue[FileRecord]" = WorkQueue(self.config.scan_queue_size,
                                                    consumers=self.config.workers)

        scanners = [RootScanner(root, self.config) for root in self.roots]
        scanner_threads = [
            Thread(target=s.run, args=(scan_q.put,), name=f"scanner-{i}", daemon=True)
            for i, s in enumerate(scanners)
        ]
        worker_threads = [
            Thread(target=self._extract_loop, args=(scan_q, writer),
                   name=f"extractor-{i}", daemon=True)
            for i in range(self.config.workers)
        ]

        self._set_stage("scanning")
        for th in worker_threads + scanner_threads:
            th.start()
        for th in scanner_threads:
            th.join()
        scan_q.close()
        logger.info("Found all files: %d", sum(s.found for s in scanners))

        self._set_stage("extracting")
        for th in worker_threads:
            th.join()
        logger.info("Processed all files")

        self._set_stage("sinking")
        written = writer.close()
        logger.info("Wrote all output: %d rows", written)

        self._set_stage("done")
        return ScanSummary(
            output=str(self.out_path),
            found={str(s.root): s.found for s in scanners},
            failed_roots=[str(s.root) for s in scanners if s.failed],
            written=written,
            elapsed=time.perf_counter() - start,
        )

    def _extract_loop(self, scan_q: "WorkQueue[FileRecord]", writer: CSVWriter):
        for record in scan_q:
            logger.debug("Processing %s", record.path)
            try:
                self.extractor.extract_features(record)
            except Exception as e:
                # steps log their own failures; this only catches bugs
                logger.error("Unexpected error processing %s: %s", record.path, e, exc_info=True)
            writer.submit(record)


def run_scan_pipeline(roots: Sequence[Union[str, Path]], out_path: Union[str, Path],
                      config: Optional[ScanConfig] = None) -> ScanSummary:
    """Convenience wrapper: build a pipeline and run it."""
    return InventoryPipeline(roots, out_path, config).run()
