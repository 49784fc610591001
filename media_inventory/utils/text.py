#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Text cleanup for tag values written to the inventory table.
"""

import string

_ALLOWED = frozenset(string.ascii_letters + string.digits + " ")


def sanitize(value) -> str:
    """Keep ASCII letters, digits and spaces; drop every other character."""
    if not value:
        return ""
    return "".join(ch for ch in str(value) if ch in _ALLOWED)
