"""Core / service layer — target graph, planning, and execution order.

Rules
-----
* No ``print()`` calls.
* No subprocess or filesystem I/O (commands go through ``CommandRunner``).
* No imports from ``cli`` or ``infra``.
"""

from taskwrap.core.config import ConfigResolver, ResolvedVariables
from taskwrap.core.executor import Executor
from taskwrap.core.models import ExecutionPlan, ExecutionResult, Target, Variable
from taskwrap.core.protocols import CommandRunner
from taskwrap.core.registry import TargetRegistry
from taskwrap.core.resolver import DependencyResolver
from taskwrap.core.targets import build_default_registry

__all__: list[str] = [
    "CommandRunner",
    "ConfigResolver",
    "DependencyResolver",
    "ExecutionPlan",
    "ExecutionResult",
    "Executor",
    "ResolvedVariables",
    "Target",
    "TargetRegistry",
    "Variable",
    "build_default_registry",
]
