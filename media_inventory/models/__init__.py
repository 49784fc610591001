"""Data models for the Media Inventory Tool."""

from .file_record import FileRecord, CSV_COLUMNS

__all__ = ['FileRecord', 'CSV_COLUMNS']
