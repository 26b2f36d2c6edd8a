"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: starting
child processes and locating executables.  Every raw OS exception must
be caught here and re-raised as a
:class:`~taskwrap.exceptions.TaskwrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from taskwrap.infra.subprocess_runner import SubprocessRunner
from taskwrap.infra.tool_detector import ToolStatus, detect_tool, install_commands_for

__all__: list[str] = [
    "SubprocessRunner",
    "ToolStatus",
    "detect_tool",
    "install_commands_for",
]
