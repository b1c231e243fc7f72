from __future__ import annotations
from functools import wraps
import logging

_log = logging.getLogger(__name__)

def logged(fn):
    """Log the result of `fn` at DEBUG, or the traceback if it raises."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        name = fn.__qualname__
        try:
            res = fn(*args, **kwargs)
            _log.debug("%s: ok -> %s", name, res)
            return res
        except Exception:
            _log.exception("%s: error", name)
            raise
    return wrapper
