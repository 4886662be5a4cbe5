"""Type and field descriptors consumed by the default value builder.

A :class:`TypeDescriptor` is the structural view of a DTO class: its
identity plus an ordered tuple of :class:`FieldDescriptor`.  Each field
carries a closed shape classification computed once by the accessor:

- :class:`PrimitiveShape`: a scalar with a zero value.
- :class:`SequenceShape`: a homogeneous list of one element shape.
- :class:`CompositeShape`: a nested DTO, expanded recursively.

A field whose shape is ``None`` could not be resolved and is skipped.
"""

from __future__ import annotations

from collections.abc import Generator, Hashable
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Literal, Protocol

from dtoinit.domain.types import PrimitiveKind, ShapeKind

# ---------------------------------------------------------------------------
# Absent marker
# ---------------------------------------------------------------------------


class _Absent(Enum):
    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> Literal[False]:
        return False


ABSENT: Final = _Absent.ABSENT
"""Returned by the builder when a type is already being expanded."""


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PrimitiveShape:
    kind: PrimitiveKind

    @property
    def shape_kind(self) -> ShapeKind:
        return ShapeKind.PRIMITIVE

    def describe(self) -> str:
        return str(self.kind)


@dataclass(frozen=True)
class SequenceShape:
    """List of ``element``; ``None`` when no single element type resolves."""

    element: Shape | None = None

    @property
    def shape_kind(self) -> ShapeKind:
        return ShapeKind.SEQUENCE

    def describe(self) -> str:
        inner = self.element.describe() if self.element is not None else "?"
        return f"list[{inner}]"


@dataclass(frozen=True)
class CompositeShape:
    target: Hashable

    @property
    def shape_kind(self) -> ShapeKind:
        return ShapeKind.COMPOSITE

    def describe(self) -> str:
        return getattr(self.target, "__qualname__", repr(self.target))


Shape = PrimitiveShape | SequenceShape | CompositeShape


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared field of a DTO type.

    Attributes:
        name: Attribute name, unique within the owning type.
        shape: Shape classification, or ``None`` when unresolvable.
        key: Document key used by structural mode (alias or name).
        writable: Whether the field has a write accessor.
    """

    name: str
    shape: Shape | None
    key: str = ""
    writable: bool = True

    def __post_init__(self) -> None:
        if not self.key:
            object.__setattr__(self, "key", self.name)


@dataclass(frozen=True)
class TypeDescriptor:
    """Identity and ordered fields of a DTO type."""

    identity: Hashable
    name: str
    fields: tuple[FieldDescriptor, ...] = ()

    def get_field(self, name: str) -> FieldDescriptor:
        for fd in self.fields:
            if fd.name == name:
                return fd
        msg = f"{self.name} has no field {name!r}"
        raise KeyError(msg)


class TypeAccessor(Protocol):
    """Supplies descriptors for type identities.

    Implementations must be deterministic and side-effect-free.
    """

    def describe(self, type_id: Hashable) -> TypeDescriptor: ...


# ---------------------------------------------------------------------------
# Cycle guard
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Truncation:
    """A cycle the builder cut while expanding ``path``."""

    type_name: str
    path: tuple[str, ...]

    def __str__(self) -> str:
        chain = " -> ".join((*self.path, self.type_name))
        return f"Cycle truncated at {self.type_name} ({chain})"


@dataclass
class VisitedSet:
    """Types currently under expansion on the active recursion path.

    Owned by a single top-level call.  A type is a member exactly while its
    expansion is on the call stack.
    """

    _members: set[Hashable] = field(default_factory=set)
    _path: list[str] = field(default_factory=list)
    truncations: list[Truncation] = field(default_factory=list)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    @contextmanager
    def expanding(self, descriptor: TypeDescriptor) -> Generator[None]:
        """Hold *descriptor* in the set for the duration of the block."""
        self._members.add(descriptor.identity)
        self._path.append(descriptor.name)
        try:
            yield
        finally:
            self._path.pop()
            self._members.discard(descriptor.identity)

    def record_cycle(self, descriptor: TypeDescriptor) -> Truncation:
        truncation = Truncation(type_name=descriptor.name, path=self.path)
        self.truncations.append(truncation)
        return truncation
