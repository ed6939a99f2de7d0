# extpack/core/logging/context.py
from __future__ import annotations
import contextvars

# All log context lives here. The build pipeline sets target/stage per invocation.
_logContextVar: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("extpack.logctx", default=None)

def setLogContext(**kvs):
    """Set or update per-log context values (target, stage, etc.)."""
    current = dict(_logContextVar.get() or {}) # use copy
    for key, value in kvs.items():
        if value is not None:
            current[key] = value
    _logContextVar.set(current)

def clearLogContext():
    """Clear context after a build invocation is fully handled."""
    _logContextVar.set(None)

def getLogContext():
    """Return current content dict or None."""
    return _logContextVar.get()
