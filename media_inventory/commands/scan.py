#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Scan command (thin wrapper).
Delegates all scanning logic to the pipeline in `scanning/pipeline.py` and
keeps only the CLI-facing banner and summary output.
"""

from pathlib import Path
from typing import List, Optional

from ..config import ScanConfig
from ..jsonio import success
from ..scanning.pipeline import InventoryPipeline, ScanSummary
from ..utils.time import utc_now_str


class ScanCommand:
    def __init__(self, out_path: Path, config: Optional[ScanConfig] = None):
        self.out_path = Path(out_path)
        self.config = config or ScanConfig()

    def execute(self, roots: List[Path], as_json: bool = False):
        """Run a scan; returns the summary (or the JSON exit code with as_json)."""
        if not as_json:
            self._print_scan_header(roots)

        pipeline = InventoryPipeline(roots, self.out_path, self.config)
        summary = pipeline.run()

        if as_json:
            return success("scan", summary.to_dict())
        self._print_scan_footer(summary)
        return summary

    def _print_scan_header(self, roots: List[Path]):
        """Print scan configuration header."""
        print("=" * 80)
        print(f"MEDIA INVENTORY SCAN - {utc_now_str()}")
        print("=" * 80)
        for root in roots:
            print(f"Root: {root}")
        print(f"Output: {self.out_path}")
        print(f"Workers: {self.config.workers}, queue sizes: "
              f"{self.config.scan_queue_size}/{self.config.record_queue_size}")
        print(f"Extensions: {', '.join(sorted(self.config.extensions))}")
        print(f"No tag parsing: {', '.join(sorted(self.config.no_tag_extensions)) or '-'}")
        if self.config.file_timeout:
            print(f"Per-file timeout: {self.config.file_timeout:g}s")
        print()

    def _print_scan_footer(self, summary: ScanSummary):
        """Print scan completion footer."""
        for root, count in summary.found.items():
            print(f"  - {root}: {count:,} media files")
        if summary.failed_roots:
            print(f"  - Roots with walk errors: {len(summary.failed_roots)}")
        print(f"  - Rows written: {summary.written:,} in {summary.elapsed:.1f}s")
        print("=" * 80)
        print(f"SCAN COMPLETED - {utc_now_str()}")
        print("=" * 80)
