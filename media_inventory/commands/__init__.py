"""Command implementations for the Media Inventory Tool."""

from .scan import ScanCommand
from .copy import cmd_copy
from .mkdirs import cmd_mkdirs
from .extensions import cmd_extensions

__all__ = ['ScanCommand', 'cmd_copy', 'cmd_mkdirs', 'cmd_extensions']
