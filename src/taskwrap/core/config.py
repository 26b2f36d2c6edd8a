"""Configuration resolution and variable substitution.

Variables are resolved once per run, in precedence order:

1. invocation-time ``KEY=value`` overrides,
2. the process environment,
3. the declared default.

The result is an immutable :class:`ResolvedVariables` value that is
threaded explicitly into the executor — there is no ambient global
configuration.

Action templates reference variables with ``$(NAME)`` or ``${NAME}``.
``$$`` produces a literal ``$``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from taskwrap.core.models import Variable
from taskwrap.exceptions import InvalidOverrideError, UndefinedVariableError

_NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"
_NAME_RE = re.compile(rf"^{_NAME_PATTERN}$")
_REFERENCE_RE = re.compile(
    rf"\$\$|\$\((?P<paren>{_NAME_PATTERN})\)|\$\{{(?P<brace>{_NAME_PATTERN})\}}"
)


def parse_override(argument: str) -> tuple[str, str]:
    """Split a ``KEY=value`` invocation argument.

    Raises
    ------
    InvalidOverrideError
        When *argument* has no ``=`` or the key is not a valid name.
    """
    key, sep, value = argument.partition("=")
    if not sep or not _NAME_RE.match(key):
        raise InvalidOverrideError(
            f"Invalid variable override: {argument!r}",
            hint="Overrides are written as NAME=value, e.g. CARGO=/opt/bin/cargo",
        )
    return key, value


def is_override(argument: str) -> bool:
    """Return ``True`` when a positional argument is a ``KEY=value`` override."""
    return "=" in argument


class ResolvedVariables(Mapping[str, str]):
    """Read-only mapping of variable values for a single run."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values: Mapping[str, str] = MappingProxyType(dict(values))

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolvedVariables({dict(self._values)!r})"

    def expand(self, template: str, *, target: str | None = None) -> str:
        """Substitute every variable reference in *template*.

        Raises
        ------
        UndefinedVariableError
            When *template* references a name that is not resolved.
        """

        def _replace(match: re.Match[str]) -> str:
            name = match.group("paren") or match.group("brace")
            if name is None:
                return "$"
            try:
                return self._values[name]
            except KeyError:
                raise UndefinedVariableError(name, target=target) from None

        return _REFERENCE_RE.sub(_replace, template)


class ConfigResolver:
    """Resolves variable values from overrides, environment, and defaults.

    Both mappings are copied at construction, so the resolver answers the
    same way for the whole run even if ``os.environ`` changes later.

    Parameters
    ----------
    overrides:
        Invocation-time ``KEY=value`` assignments.
    environ:
        Environment mapping; typically ``os.environ``.
    """

    def __init__(
        self,
        overrides: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._overrides: dict[str, str] = dict(overrides or {})
        self._environ: dict[str, str] = dict(environ or {})

    @classmethod
    def from_arguments(
        cls,
        arguments: Iterable[str],
        environ: Mapping[str, str] | None = None,
    ) -> ConfigResolver:
        """Build a resolver from raw ``KEY=value`` arguments."""
        overrides: dict[str, str] = {}
        for argument in arguments:
            key, value = parse_override(argument)
            overrides[key] = value
        return cls(overrides, environ)

    def resolve(self, name: str, default: str) -> str:
        """Return the effective value of *name*."""
        if name in self._overrides:
            return self._overrides[name]
        if name in self._environ:
            return self._environ[name]
        return default

    def resolve_all(self, variables: Iterable[Variable]) -> ResolvedVariables:
        """Resolve every declared variable into an immutable set.

        Overrides for names that were never declared are kept as well;
        a command-line assignment defines the variable.
        """
        values = {var.name: self.resolve(var.name, var.default) for var in variables}
        for name, value in self._overrides.items():
            values.setdefault(name, value)
        return ResolvedVariables(values)
