# extpack/core/redaction.py
from __future__ import annotations

import re

__all__ = ["redactText"]



# Precompiled sensitive-data regex patterns
_SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # PEM private key blocks (signing keys end up in the manifest "key" field)
    (
        re.compile(r"(-----BEGIN [A-Z ]*PRIVATE KEY-----)[\s\S]*?(-----END [A-Z ]*PRIVATE KEY-----)"),
        r"\1***\2",
    ),

    # Bearer or Authorization headers
    (re.compile(r"(?iu)(Bearer\s+)[A-Za-z0-9._\-]+"), r"\1***"),
    (re.compile(r"(?iu)(Authorization\s*[:=]\s*)[A-Za-z0-9._\-]+"), r"\1***"),

    # OAuth secrets in JSON or key=value form
    (re.compile(r'(?iu)("client[_\-]?secret"\s*:\s*")[^"]+(")'), r"\1***\2"),
    (re.compile(r'(?iu)(client[_\-]?secret=)[^&\s]+'), r"\1***"),

    # API key or token-style key/value pairs
    (re.compile(r'(?iu)("api[_\-]?key"\s*:\s*")[^"]+(")'), r"\1***\2"),
    (re.compile(r'(?iu)("token"\s*:\s*")[^"]+(")'), r"\1***\2"),
    (re.compile(r'(?iu)(token=)[^&\s]+'), r"\1***"),
]



def redactText(text: str) -> str:
    """Return sanitized text with sensitive substrings replaced by ***."""
    if not text:
        return text
    out = text
    for pattern, repl in _SENSITIVE_PATTERNS:
        try:
            out = pattern.sub(repl, out)
        except re.error:
            continue # Never crash logging on regex errors
    return out
