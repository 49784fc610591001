#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Feature extraction for the Media Inventory Tool.

Each step opens the file on its own handle and fails independently: a failed
step is logged and its fields stay empty, the record always comes back.
"""

import hashlib
import logging
from typing import Optional

from ..config import ScanConfig
from ..models.file_record import FileRecord
from ..utils.text import sanitize
from ..utils.timeouts import with_timeout
from .checksum import audio_checksum
from .tags import AudioTags, read_tags

logger = logging.getLogger(__name__)


class FeatureExtractor:
    """Fills the hash, tag and checksum fields of scanned records."""

    def __init__(self, config: Optional[ScanConfig] = None):
        self.config = config or ScanConfig()

    def extract_features(self, record: FileRecord) -> FileRecord:
        """Enrich one record in place and return it."""
        record.full_hash = self._run("hash", record, self._compute_md5) or ""

        # the tag reader does not understand these containers
        if self.config.skip_tags(record.ext):
            return record

        tags = self._run("read metadata from", record, self._read_tags)
        if tags is None:
            return record
        self._apply_tags(record, tags)

        record.audio_checksum = self._run(
            "checksum audio content in", record, self._compute_audio_checksum) or ""
        return record

    def _run(self, action: str, record: FileRecord, step):
        """Run one step under the optional per-file timeout; log and return None on failure."""
        try:
            return with_timeout(step, self.config.file_timeout, record.path)
        except Exception as e:
            logger.warning("FAILED to %s %s: %s", action, record.path, e)
            return None

    def _compute_md5(self, path: str) -> str:
        """MD5 over the whole file, uppercase hex."""
        h = hashlib.md5()
        chunk_size = self.config.chunk_size
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                h.update(chunk)
        return h.hexdigest().upper()

    def _read_tags(self, path: str) -> AudioTags:
        with open(path, "rb") as f:
            return read_tags(f)

    def _compute_audio_checksum(self, path: str) -> str:
        with open(path, "rb") as f:
            return audio_checksum(f, self.config.chunk_size)

    @staticmethod
    def _apply_tags(record: FileRecord, tags: AudioTags) -> None:
        record.format = tags.format
        record.file_type = tags.file_type
        record.title = sanitize(tags.title)
        record.album = sanitize(tags.album)
        record.artist = sanitize(tags.artist)
        record.album_artist = sanitize(tags.album_artist)
        record.composer = sanitize(tags.composer)
        record.genre = sanitize(tags.genre)
        record.year = tags.year
        record.track_number = tags.track_number
        record.track_total = tags.track_total
        record.disk_number = tags.disk_number
        record.disk_total = tags.disk_total
