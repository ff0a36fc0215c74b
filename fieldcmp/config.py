"""Environment-driven configuration for fieldcmp."""

from __future__ import annotations

import os

PRETTY_INDENT_ENV_VAR = "FIELDCMP_PRETTY_INDENT"
DEFAULT_PRETTY_INDENT = 4
_MAX_PRETTY_INDENT = 16


def resolve_pretty_indent() -> int:
    """Indent width for pretty value rendering."""
    raw = os.environ.get(PRETTY_INDENT_ENV_VAR)
    if raw is None:
        return DEFAULT_PRETTY_INDENT
    try:
        parsed = int(raw.strip())
    except ValueError:
        return DEFAULT_PRETTY_INDENT
    if parsed <= 0:
        return DEFAULT_PRETTY_INDENT
    return min(parsed, _MAX_PRETTY_INDENT)
