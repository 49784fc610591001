"""Media Inventory Tool - hashes, audio checksums and tag metadata for a music collection."""

__version__ = "1.0.0"
__author__ = "Media Tool Team"

# Import key classes for convenient top-level access
from .commands import ScanCommand
from .config import ScanConfig
from .scanning import InventoryPipeline, RootScanner, FeatureExtractor, ScanSummary
from .models import FileRecord, CSV_COLUMNS
from .writer import CSVWriter

# Common convenience imports
from .utils import utc_now_str, sanitize, ensure_dir

__all__ = [
    # Core classes
    'ScanCommand',
    'ScanConfig',
    'InventoryPipeline',
    'ScanSummary',

    # Pipeline stages
    'RootScanner',
    'FeatureExtractor',
    'CSVWriter',

    # Data models
    'FileRecord',
    'CSV_COLUMNS',

    # Utilities
    'utc_now_str',
    'sanitize',
    'ensure_dir',

    # Package metadata
    '__version__',
    '__author__'
]
