# config.py

"""Global configuration for linexpr warnings and debug behavior.

Usage:
- Toggle debug checks and diagnostics (e.g., iterator range checks,
  densification warnings):
    from linexpr.config import set_debug
    set_debug(True)

- Or via environment variable:
    export LINEXPR_DEBUG=1
"""

from __future__ import annotations

import os
import warnings

_DEBUG: bool = os.getenv("LINEXPR_DEBUG", "0") not in {"0", "false", "False", ""}


class LinexprWarning(UserWarning):
    """Category of the warnings issued by :func:`warn`."""


def set_debug(value: bool) -> None:
    """Enable or disable debug mode (controls checks and warnings)."""
    global _DEBUG  # noqa: PLW0603
    _DEBUG = bool(value)


def is_debug() -> bool:
    """Return whether debug mode is enabled."""
    return _DEBUG


def warn(msg: str, *, prefix: str = "Warning", force: bool = False) -> None:
    """Conditionally issue a warning message if debug is enabled.

    Args:
        msg: Message to issue.
        prefix: Optional prefix for the message, defaults to 'Warning'.
        force: Issue the warning even when debug mode is off.
    """
    if _DEBUG or force:
        warnings.warn(f"{prefix}: {msg}", LinexprWarning, stacklevel=3)
