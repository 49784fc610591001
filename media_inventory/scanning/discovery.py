#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
File discovery logic for the Media Inventory Tool.
Walks one root directory tree and emits a FileRecord for every media file.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, Union

from ..config import ScanConfig
from ..models.file_record import FileRecord
from ..utils.path import extension_of, is_hidden
from ..utils.time import mod_time_from_stat

logger = logging.getLogger(__name__)


class RootScanner:
    """Scans a single root; one instance runs per configured root."""

    def __init__(self, root: Union[str, Path], config: ScanConfig):
        self.root = Path(root)
        self.config = config
        self.found = 0
        self.failed = False

    def iter_records(self) -> Iterator[FileRecord]:
        """Yield records for matching files below the root.

        Any OSError while walking propagates and ends the walk; the root
        itself is not subject to the hidden-name check.
        """
        root = os.path.abspath(self.root)
        if not os.path.isdir(root):
            # scandir would raise too, but the message is clearer this way
            raise NotADirectoryError(f"not a directory: {root}")
        yield from self._scan_recursive(root)

    def _scan_recursive(self, path: str) -> Iterator[FileRecord]:
        with os.scandir(path) as entries:
            for entry in entries:
                if is_hidden(entry.name):
                    continue

                if entry.is_dir(follow_symlinks=False):
                    yield from self._scan_recursive(entry.path)
                elif entry.is_file():
                    ext = extension_of(entry.name)
                    if not self.config.is_media(ext):
                        continue
                    try:
                        st = entry.stat()
                        mod_time = mod_time_from_stat(st.st_mtime)
                    except (OSError, ValueError, OverflowError) as e:
                        # mtimes outside the platform's range land here too
                        self.failed = True
                        logger.error("FAILED to stat %s: %s", entry.path, e)
                        continue
                    yield FileRecord(
                        path=os.path.abspath(entry.path),
                        ext=ext,
                        size=st.st_size,
                        mod_time=mod_time,
                    )

    def run(self, emit: Callable[[FileRecord], None]) -> int:
        """Walk the root, passing each record to `emit`.

        A walk error aborts this root only: it is logged and the count of
        records emitted so far is returned. A file that cannot be stat'ed is
        logged and skipped; either case marks the root as failed.
        """
        logger.info("Scanning %s", self.root)
        try:
            for record in self.iter_records():
                logger.debug("Found %s", record.path)
                emit(record)
                self.found += 1
        except OSError as e:
            self.failed = True
            logger.error("FAILED to walk %s: %s", self.root, e)
        else:
            logger.info("Finished %s: %d media files", self.root, self.found)
        return self.found


def discover_media_files(root: Union[str, Path], config: ScanConfig = None) -> list:
    """Convenience function: collect the records of one root into a list."""
    scanner = RootScanner(root, config or ScanConfig())
    records = []
    scanner.run(records.append)
    return records
