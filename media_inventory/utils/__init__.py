"""Utility functions for the Media Inventory Tool."""

from .time import utc_now_str, format_mod_time, mod_time_from_stat
from .path import ensure_dir, is_hidden, extension_of
from .text import sanitize
from .timeouts import with_timeout

__all__ = [
    'utc_now_str', 'format_mod_time', 'mod_time_from_stat',
    'ensure_dir', 'is_hidden', 'extension_of',
    'sanitize', 'with_timeout',
]
