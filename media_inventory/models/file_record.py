#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Data structures for file records in the Media Inventory Tool.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List

from ..utils.time import format_mod_time

# Column order of the output table
CSV_COLUMNS = [
    "path", "extension", "size", "mod_time", "full_hash", "audio_checksum",
    "format", "file_type", "title", "album", "album_artist", "artist",
    "composer", "genre", "year", "track_number", "track_total",
    "disk_number", "disk_total",
]


@dataclass
class FileRecord:
    """File record passed between pipeline stages.

    The scanner fills the identity fields; one extractor worker fills the rest.
    Empty strings and zeros mean "not available".
    """
    path: str
    ext: str
    size: int
    mod_time: datetime

    # Computed features (filled by the extractor)
    full_hash: str = ""
    audio_checksum: str = ""
    format: str = ""
    file_type: str = ""
    title: str = ""
    album: str = ""
    artist: str = ""
    album_artist: str = ""
    composer: str = ""
    genre: str = ""
    year: int = 0
    track_number: int = 0
    track_total: int = 0
    disk_number: int = 0
    disk_total: int = 0

    def to_row(self) -> List[str]:
        """Render the record in CSV_COLUMNS order."""
        return [
            self.path,
            self.ext,
            str(self.size),
            format_mod_time(self.mod_time),
            self.full_hash,
            self.audio_checksum,
            self.format,
            self.file_type,
            self.title,
            self.album,
            self.album_artist,
            self.artist,
            self.composer,
            self.genre,
            str(self.year),
            str(self.track_number),
            str(self.track_total),
            str(self.disk_number),
            str(self.disk_total),
        ]
