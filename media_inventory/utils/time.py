#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Time utility functions for the Media Inventory Tool.
"""

from datetime import datetime, timezone

from ..config import MOD_TIME_FORMAT


def utc_now_str() -> str:
    """Return current UTC time in ISO-8601 format with 'Z'."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def mod_time_from_stat(st_mtime: float) -> datetime:
    """Convert a stat mtime into an aware datetime in the local timezone."""
    return datetime.fromtimestamp(st_mtime).astimezone()


def format_mod_time(value: datetime) -> str:
    """Format as 'YYYY-MM-DD HH:MM:SS.mmm +ZZZZ' (naive values are taken as local time)."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.strftime(MOD_TIME_FORMAT).format(ms=value.microsecond // 1000)
