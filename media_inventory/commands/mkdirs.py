#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bulk directory creation for the Media Inventory Tool.
Creates every directory listed in the first column of a CSV, parents included,
so a following `copy` run never has to create them.
"""

import csv
import logging
from pathlib import Path

from ..jsonio import success
from ..utils.path import ensure_dir

logger = logging.getLogger(__name__)


def cmd_mkdirs(csv_path: Path, as_json: bool = False):
    """Create the directories listed in csv_path; failures are logged and skipped."""
    created = failed = 0
    with open(csv_path, newline="", encoding="utf-8") as f:
        for row in csv.reader(f):
            if not row or not row[0].strip():
                continue
            logger.info("%s", row[0])
            try:
                ensure_dir(Path(row[0]))
                created += 1
            except OSError as e:
                logger.error("FAILED to create %s: %s", row[0], e)
                failed += 1

    if as_json:
        return success("mkdirs", {"created": created, "failed": failed})
    print(f"Created {created:,} directories ({failed:,} failed)")
    return {"created": created, "failed": failed}
