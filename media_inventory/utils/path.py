#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the Media Inventory Tool.
"""

from pathlib import Path


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary."""
    p.mkdir(parents=True, exist_ok=True)


def is_hidden(name: str) -> bool:
    """Dot-prefixed names are hidden; their subtrees are never walked."""
    return name.startswith(".")


def extension_of(name: str) -> str:
    """Suffix from the last dot of the final name element, dot included ('' if none)."""
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""
