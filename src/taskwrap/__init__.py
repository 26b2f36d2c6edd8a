"""taskwrap — declarative task runner for wrapping an external toolchain.

Named targets, dependency ordering, and fail-fast execution of the
commands each target wraps.
"""

from taskwrap.version import __version__

__all__: list[str] = ["__version__"]
