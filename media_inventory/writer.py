import csv
import logging
from pathlib import Path
from threading import Thread
from typing import Optional, Union

from tqdm import tqdm

from .config import ScanConfig
from .models.file_record import CSV_COLUMNS, FileRecord
from .workqueue import WorkQueue

logger = logging.getLogger(__name__)


class CSVWriter:
    """Single writer thread that turns finished records into CSV rows.

    The output file is opened in the constructor, so a destination that
    cannot be created fails before any work is queued.
    """

    def __init__(self, out_path: Union[str, Path], config: Optional[ScanConfig] = None):
        self.out_path = Path(out_path)
        self.config = config or ScanConfig()
        self.written = 0
        self.failed = 0
        self.q: "WorkQueue[FileRecord]" = WorkQueue(self.config.record_queue_size)
        # surrogateescape writes undecodable file-name bytes back out unchanged
        self._fh = open(self.out_path, "w", newline="", encoding="utf-8",
                        errors="surrogateescape")
        self._writer = csv.writer(self._fh)
        self._th = Thread(target=self._run, name="csv-writer", daemon=True)
        self._th.start()

    def _run(self):
        every = self.config.progress_every
        bar = tqdm(unit="file", desc="Writing", disable=not self.config.show_progress)
        try:
            if self.config.write_header:
                try:
                    self._writer.writerow(CSV_COLUMNS)
                except OSError as e:
                    logger.error("FAILED to write header to %s: %s", self.out_path, e)
            # keep draining after a bad row so the extractors never block
            for record in self.q:
                try:
                    self._writer.writerow(record.to_row())
                    self.written += 1
                except Exception as e:
                    self.failed += 1
                    logger.error("FAILED to write %s to csv: %s", record.path, e)
                else:
                    if every and self.written % every == 0:
                        logger.info("Wrote %d records", self.written)
                bar.update(1)
        finally:
            bar.close()
            try:
                self._fh.flush()
            except OSError as e:
                logger.error("FAILED to flush %s: %s", self.out_path, e)
            self._fh.close()
        logger.info("Wrote %d records to %s", self.written, self.out_path)

    def submit(self, record: FileRecord):
        self.q.put(record)

    def close(self) -> int:
        """Close the queue, wait for the writer to drain it, return rows written."""
        self.q.close()
        self._th.join()
        return self.written
