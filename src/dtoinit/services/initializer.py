"""Library entry points — build default DTO instances.

Usage::

    from dtoinit import init, init_structural, default_tree

    user = init(UserDto)                # direct mode
    user = init_structural(UserDto)     # document, then pydantic conversion
    doc = default_tree(UserDto)         # the document itself

Every call seeds a fresh :class:`VisitedSet`, so calls never share cycle
state and may run concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dtoinit.domain.builder import DefaultValueBuilder
from dtoinit.domain.descriptors import Truncation, TypeAccessor, TypeDescriptor, VisitedSet
from dtoinit.domain.types import Mode
from dtoinit.infrastructure.materializers import (
    DirectMaterializer,
    PydanticConverter,
    StructuralMaterializer,
)
from dtoinit.infrastructure.reflection import ReflectionAccessor


@dataclass(frozen=True)
class BuildOutcome:
    """A built value plus the cycles cut while building it."""

    value: Any
    truncations: tuple[Truncation, ...] = ()


class DtoInitializer:
    """Wires an accessor and converter to both materialization modes."""

    def __init__(
        self,
        accessor: TypeAccessor | None = None,
        converter: PydanticConverter | None = None,
    ) -> None:
        self._accessor = accessor or ReflectionAccessor()
        self._converter = converter or PydanticConverter()
        self._structural = DefaultValueBuilder(self._accessor, StructuralMaterializer())
        self._direct = DefaultValueBuilder(self._accessor, DirectMaterializer())

    @property
    def accessor(self) -> TypeAccessor:
        return self._accessor

    def describe(self, cls: type) -> TypeDescriptor:
        return self._accessor.describe(cls)

    def tree(self, cls: type) -> BuildOutcome:
        """Build the structural document without converting it."""
        return self._run(self._structural, cls)

    def structural(self, cls: type) -> BuildOutcome:
        """Build the document, then convert it onto *cls*.

        Raises:
            ConversionError: If the converter refuses the document.
        """
        outcome = self.tree(cls)
        instance = self._converter.convert(outcome.value, cls)
        return BuildOutcome(value=instance, truncations=outcome.truncations)

    def direct(self, cls: type) -> BuildOutcome:
        """Construct *cls* and assign defaults field by field.

        Raises:
            ConstructionError: If construction or any assignment fails.
        """
        return self._run(self._direct, cls)

    def run(self, cls: type, mode: Mode) -> BuildOutcome:
        if mode is Mode.STRUCTURAL:
            return self.structural(cls)
        return self.direct(cls)

    @staticmethod
    def _run(builder: DefaultValueBuilder, cls: type) -> BuildOutcome:
        visited = VisitedSet()
        value = builder.build(cls, visited)
        return BuildOutcome(value=value, truncations=tuple(visited.truncations))


_default = DtoInitializer()


def init_direct[T](cls: type[T]) -> T:
    """Default instance of *cls* built in direct mode."""
    return _default.direct(cls).value


def init_structural[T](cls: type[T]) -> T:
    """Default instance of *cls* built via the structural document."""
    return _default.structural(cls).value


def default_tree(cls: type) -> dict[str, Any]:
    """Structural document for *cls* (cyclic fields omitted)."""
    return _default.tree(cls).value


def describe(cls: type) -> TypeDescriptor:
    return _default.describe(cls)


init = init_direct
