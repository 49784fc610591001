#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Timeout utilities.
"""

from concurrent.futures import Future, TimeoutError as _FuturesTimeout
from threading import Thread
from typing import Any, Callable


def with_timeout(fn: Callable[..., Any], seconds: float, *args, **kwargs) -> Any:
    """Run fn, raising TimeoutError if it takes longer than `seconds`.

    The call runs on a daemon thread. One that times out is abandoned, not
    cancelled, and never holds up interpreter exit. `seconds` of None or
    <= 0 calls fn directly.
    """
    if seconds is None or seconds <= 0:
        return fn(*args, **kwargs)

    fut: Future = Future()

    def _call():
        fut.set_running_or_notify_cancel()
        try:
            fut.set_result(fn(*args, **kwargs))
        except Exception as e:
            fut.set_exception(e)

    Thread(target=_call, name="file-timeout", daemon=True).start()
    try:
        return fut.result(timeout=seconds)
    except _FuturesTimeout as e:
        raise TimeoutError(f"Operation exceeded {seconds} seconds") from e
