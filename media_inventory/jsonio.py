# media_inventory/jsonio.py
from __future__ import annotations
import json, logging, sys
from typing import Any, Dict, Optional

def enable_json_logging():
    """Send logs to stderr and keep stdout for the single JSON result."""
    # Drop existing handlers to avoid duplicate logs
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    logging.basicConfig(stream=sys.stderr, level=logging.ERROR)

def _emit(payload: Dict[str, Any]) -> None:
    # stdout carries exactly one JSON object per command
    print(json.dumps(payload, ensure_ascii=False, default=str), file=sys.stdout)
    sys.stdout.flush()

def success(command: str, data: Dict[str, Any] | list | None = None,
            meta: Optional[Dict[str, Any]] = None, code: int = 0) -> int:
    payload = {"result": "success", "command": command, "data": data if data is not None else {}}
    if meta:
        payload["meta"] = meta
    _emit(payload)
    return code

def error(command: str, message: str, debug: Optional[Dict[str, Any]] = None, code: int = 1) -> int:
    payload = {"result": "error", "command": command, "error": message}
    if debug:
        payload["debug"] = debug
    _emit(payload)
    return code

def error_from_exception(command: str, exc: BaseException, verbose: bool = False, code: int = 1) -> int:
    """Report an exception that ended a command; the type is only shown with --verbose."""
    debug = {"exception_type": type(exc).__name__} if verbose else None
    if isinstance(exc, OSError) and exc.filename:
        debug = dict(debug or {}, filename=str(exc.filename))
    return error(command, str(exc), debug=debug, code=code)
