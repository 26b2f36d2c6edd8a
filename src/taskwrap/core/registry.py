"""Static registry of named targets.

Targets are declared once during startup, then the registry is sealed.
After :meth:`TargetRegistry.seal` nothing mutates it, so any number of
readers may call :meth:`TargetRegistry.lookup` without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from taskwrap.core.models import Target, Variable
from taskwrap.exceptions import (
    DuplicateTargetError,
    RegistrySealedError,
    UnknownTargetError,
)


class TargetRegistry:
    """Name → :class:`Target` table with a designated default target.

    The default target is the one set with :meth:`set_default`, otherwise
    the first target registered.
    """

    def __init__(self, variables: Iterable[Variable] = ()) -> None:
        self._targets: dict[str, Target] = {}
        self._default: str | None = None
        self._sealed: bool = False
        self.variables: tuple[Variable, ...] = tuple(variables)
        """Variables the registered actions may reference."""

    # ------------------------------------------------------------------
    # Declaration phase
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        dependencies: Iterable[str] = (),
        action: str | None = None,
        phony: bool = True,
        *,
        description: str = "",
    ) -> Target:
        """Declare a target.

        Raises
        ------
        DuplicateTargetError
            When *name* is already registered.
        RegistrySealedError
            When called after :meth:`seal`.
        """
        self._ensure_open()
        if name in self._targets:
            raise DuplicateTargetError(f"Target '{name}' is declared more than once")
        target = Target(
            name=name,
            dependencies=tuple(dependencies),
            action=action,
            phony=phony,
            description=description,
        )
        self._targets[name] = target
        return target

    def set_default(self, name: str) -> None:
        """Designate the target used when an invocation names none."""
        self._ensure_open()
        self._default = name

    def seal(self) -> TargetRegistry:
        """End the declaration phase; the registry is read-only afterwards.

        Raises
        ------
        UnknownTargetError
            When the default target is not registered (or nothing is).
        """
        default = self.default
        if default not in self._targets:
            raise UnknownTargetError(f"Default target '{default}' is not declared")
        self._sealed = True
        return self

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _ensure_open(self) -> None:
        if self._sealed:
            raise RegistrySealedError("Targets cannot be declared after startup")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def default(self) -> str:
        """Name of the default target."""
        if self._default is not None:
            return self._default
        for name in self._targets:
            return name
        raise UnknownTargetError("No targets are declared")

    def lookup(self, name: str) -> Target:
        """Return the target called *name*.

        Raises
        ------
        UnknownTargetError
            When no such target is registered.
        """
        try:
            return self._targets[name]
        except KeyError:
            raise UnknownTargetError(
                f"No target named '{name}'",
                hint=f"Available targets: {', '.join(self._targets) or '(none)'}",
            ) from None

    def names(self) -> tuple[str, ...]:
        """Target names in declaration order."""
        return tuple(self._targets)

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets.values())

    def __len__(self) -> int:
        return len(self._targets)
