#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bulk copy command for the Media Inventory Tool.

Reads a two-column CSV (existing file, destination path), typically exported
after reviewing the inventory, and copies each file to its new location.
Destination directories are expected to exist already (see `mkdirs`).
"""

import csv
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Tuple

from ..jsonio import success

logger = logging.getLogger(__name__)


def copy_one(src: str, dst: str) -> Tuple[bool, str]:
    """Copy src to dst, overwriting dst. Returns (ok, status)."""
    try:
        with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
            fdst.flush()
            os.fsync(fdst.fileno())
        return True, "copied"
    except FileNotFoundError as e:
        logger.error("FAILED to copy %s to %s: %s", src, dst, e)
        return False, "error_not_found"
    except PermissionError as e:
        logger.error("FAILED to copy %s to %s: %s", src, dst, e)
        return False, "error_permission"
    except OSError as e:
        logger.error("FAILED to copy %s to %s: %s", src, dst, e)
        return False, "error_os"


def cmd_copy(csv_path: Path, as_json: bool = False):
    """Copy every (source, destination) pair listed in csv_path.

    Bad rows and failed copies are logged and skipped. A missing csv_path
    raises FileNotFoundError.
    """
    stats: Dict[str, int] = {"copied": 0, "failed": 0, "bad_rows": 0}

    with open(csv_path, newline="", encoding="utf-8") as f:
        for row in csv.reader(f):
            if len(row) != 2:
                logger.warning("Bad field count: %d %s", len(row), row)
                stats["bad_rows"] += 1
                continue
            src, dst = row
            logger.info("%s -> %s", src, dst)
            ok, _ = copy_one(src, dst)
            stats["copied" if ok else "failed"] += 1

    logger.info("DONE! %d copied, %d failed, %d bad rows",
                stats["copied"], stats["failed"], stats["bad_rows"])
    if as_json:
        return success("copy", stats)
    print(f"Copied {stats['copied']:,} files ({stats['failed']:,} failed, "
          f"{stats['bad_rows']:,} bad rows)")
    return stats
