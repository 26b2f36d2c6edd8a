"""Built-in target declarations for the Rust workspace.

Mirrors the project Makefile: ``fmt`` and ``clippy`` are run by the
default ``all`` target, and ``clippy`` always starts from a clean
package build so every warning is reported.
"""

from __future__ import annotations

from taskwrap.core.models import Variable
from taskwrap.core.registry import TargetRegistry

VARIABLES: tuple[Variable, ...] = (
    Variable("CARGO", "cargo", "Path of the cargo executable"),
    Variable("PACKAGE", "byote", "Package passed to cargo clean"),
)

DEFAULT_TARGET: str = "all"


def build_default_registry() -> TargetRegistry:
    """Declare the built-in targets and return the sealed registry."""
    registry = TargetRegistry(VARIABLES)
    registry.register(
        "clean",
        action="$(CARGO) clean --package $(PACKAGE)",
        description="Remove build artifacts of the package",
    )
    registry.register("fmt", action="$(CARGO) fmt", description="Format the sources")
    registry.register(
        "clippy",
        ["clean"],
        action="$(CARGO) clippy -- -D warnings",
        description="Lint with warnings as errors",
    )
    registry.register("all", ["fmt", "clippy"], description="Format and lint")
    # Placeholder: phony, no recipe.
    registry.register("run")
    registry.set_default(DEFAULT_TARGET)
    return registry.seal()
