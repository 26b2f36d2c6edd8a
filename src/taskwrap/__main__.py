"""Allow ``python -m taskwrap`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m taskwrap`` behaves identically to the ``taskwrap``
console script.
"""

from __future__ import annotations

from taskwrap.cli.app import cli

if __name__ == "__main__":
    cli()
