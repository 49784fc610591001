"""Scanning and processing modules for the Media Inventory Tool."""

from .checksum import audio_checksum
from .discovery import RootScanner, discover_media_files
from .extractor import FeatureExtractor
from .pipeline import InventoryPipeline, ScanSummary, run_scan_pipeline
from .tags import AudioTags, UnsupportedFormatError, read_tags

__all__ = [
    'AudioTags',
    'FeatureExtractor',
    'InventoryPipeline',
    'RootScanner',
    'ScanSummary',
    'UnsupportedFormatError',
    'audio_checksum',
    'discover_media_files',
    'read_tags',
    'run_scan_pipeline',
]
