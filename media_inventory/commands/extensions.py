#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Extension frequency report for the Media Inventory Tool.

Answers "what kinds of files are in these roots?" before choosing the scan
allow-list. Single-threaded; hidden files are skipped but hidden directories
are still walked.
"""

import csv
import logging
import os
from collections import Counter
from pathlib import Path
from typing import Iterator, List

from ..jsonio import success
from ..utils.path import extension_of, is_hidden

logger = logging.getLogger(__name__)


def _iter_file_names(path: str) -> Iterator[str]:
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from _iter_file_names(entry.path)
            elif not is_hidden(entry.name):
                yield entry.name


def count_extensions(roots: List[Path]) -> Counter:
    """Count files per extension over all roots; a walk error ends that root only."""
    counts: Counter = Counter()
    for root in roots:
        try:
            for name in _iter_file_names(str(root)):
                counts[extension_of(name)] += 1
        except OSError as e:
            logger.error("FAILED to walk %s: %s", root, e)
    return counts


def cmd_extensions(roots: List[Path], out_path: Path, as_json: bool = False):
    """Write `extension,count` rows (sorted by extension) to out_path."""
    counts = count_extensions(roots)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        for ext in sorted(counts):
            writer.writerow([ext, counts[ext]])
    logger.info("Wrote %d extensions to %s", len(counts), out_path)

    if as_json:
        return success("extensions", {"output": str(out_path), "counts": dict(counts)})
    for ext, n in counts.most_common():
        print(f"{ext or '(none)':<12} {n:>10,}")
    return counts
