"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Callers can tell "a target's command failed" (``ACTION_FAILED``) from
"the request itself was invalid" (``DECLARATION_ERROR``).
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — every planned target succeeded."""

ACTION_FAILED: int = 1
"""A target's command failed; the remaining plan was abandoned."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

DECLARATION_ERROR: int = 3
"""Unknown target, dependency cycle, duplicate target, or bad variable."""

GENERAL_ERROR: int = 4
"""Any other TaskwrapError.  User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

TERMINATED: int = 143
"""SIGTERM arrived mid-run; the running command was killed (128 + SIGTERM=15)."""
