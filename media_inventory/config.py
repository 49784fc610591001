#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Media Inventory Tool.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

# File type categories
AUDIO_EXT: FrozenSet[str] = frozenset({".m4a", ".m4p", ".mp3", ".ogg", ".wav", ".wma"})
VIDEO_EXT: FrozenSet[str] = frozenset({".m4v"})
SUPPORTED_EXT: FrozenSet[str] = AUDIO_EXT | VIDEO_EXT

# Extensions the tag reader has no support for (compared case-insensitively)
NO_TAG_EXT: FrozenSet[str] = frozenset({".wma"})

# Output file names
DEFAULT_OUTPUT = "files.csv"
DEFAULT_EXT_OUTPUT = "ext.csv"

# Processing defaults
DEFAULT_WORKERS = 8
DEFAULT_QUEUE_SIZE = 20
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1MB read size for hashing
DEFAULT_FILE_TIMEOUT = 0.0  # seconds, 0 disables
PROGRESS_EVERY = 50

# Modification time column, e.g. 2024-12-10 14:30:12.042 +0100
MOD_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.{ms:03d} %z"


@dataclass(frozen=True)
class ScanConfig:
    """Read-only settings shared by every scanner and extractor of a run."""
    extensions: FrozenSet[str] = SUPPORTED_EXT
    no_tag_extensions: FrozenSet[str] = NO_TAG_EXT
    workers: int = DEFAULT_WORKERS
    scan_queue_size: int = DEFAULT_QUEUE_SIZE
    record_queue_size: int = DEFAULT_QUEUE_SIZE
    file_timeout: float = DEFAULT_FILE_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    progress_every: int = PROGRESS_EVERY
    write_header: bool = True
    show_progress: bool = False
    _no_tag_lower: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.scan_queue_size < 1 or self.record_queue_size < 1:
            raise ValueError("queue sizes must be at least 1")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "extensions", frozenset(self.extensions))
        object.__setattr__(self, "no_tag_extensions", frozenset(self.no_tag_extensions))
        object.__setattr__(self, "_no_tag_lower",
                           frozenset(e.lower() for e in self.no_tag_extensions))

    def is_media(self, ext: str) -> bool:
        """Exact match against the allow-list."""
        return ext in self.extensions

    def skip_tags(self, ext: str) -> bool:
        return ext.lower() in self._no_tag_lower

    @classmethod
    def build(cls, extensions: Optional[Iterable[str]] = None,
              no_tag_extensions: Optional[Iterable[str]] = None, **kwargs) -> "ScanConfig":
        """Build a config from CLI-style values, normalising extensions to start with a dot."""
        if extensions:
            kwargs["extensions"] = frozenset(_dotted(e) for e in extensions)
        if no_tag_extensions is not None:
            kwargs["no_tag_extensions"] = frozenset(_dotted(e) for e in no_tag_extensions)
        return cls(**kwargs)


def _dotted(ext: str) -> str:
    ext = ext.strip()
    return ext if ext.startswith(".") else "." + ext
