"""Default value builder — recursive type-to-default construction.

The builder walks a type's fields in declaration order and computes a zero
value for each one.  Nested composites and sequence elements recurse with
the same :class:`VisitedSet`; a type that is already being expanded on the
current path yields :data:`ABSENT` and is omitted from its parent.

How a value is assembled is delegated to a :class:`Materializer`, so the
same traversal serves both the structural (document) and direct (instance)
modes.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import Any, Protocol

from dtoinit.domain.descriptors import (
    ABSENT,
    CompositeShape,
    FieldDescriptor,
    PrimitiveShape,
    SequenceShape,
    Shape,
    TypeAccessor,
    TypeDescriptor,
    VisitedSet,
)
from dtoinit.domain.types import ZERO_VALUES

logger = logging.getLogger(__name__)


class Materializer(Protocol):
    """Assembly primitives the builder calls for each expanded type."""

    def accepts(self, field: FieldDescriptor) -> bool:
        """Whether *field* should be computed at all."""
        ...

    def begin(self, descriptor: TypeDescriptor) -> Any:
        """Return an empty container for *descriptor*'s fields."""
        ...

    def write(self, target: Any, field: FieldDescriptor, value: Any) -> None:
        """Store *value* for *field* on *target*."""
        ...


class DefaultValueBuilder:
    """Recursively builds fully-populated default values.

    Usage::

        builder = DefaultValueBuilder(accessor, materializer)
        visited = VisitedSet()
        value = builder.build(UserDto, visited)
    """

    def __init__(self, accessor: TypeAccessor, materializer: Materializer) -> None:
        self._accessor = accessor
        self._materializer = materializer

    def build(self, type_id: Hashable, visited: VisitedSet) -> Any:
        """Build the default value for *type_id*, or ABSENT on a cycle."""
        descriptor = self._accessor.describe(type_id)
        if descriptor.identity in visited:
            truncation = visited.record_cycle(descriptor)
            logger.info("%s", truncation)
            return ABSENT

        with visited.expanding(descriptor):
            target = self._materializer.begin(descriptor)
            for fd in descriptor.fields:
                if fd.shape is None or not self._materializer.accepts(fd):
                    continue
                value = self._value_for(fd.shape, visited)
                if value is ABSENT:
                    continue
                self._materializer.write(target, fd, value)
        return target

    def _value_for(self, shape: Shape, visited: VisitedSet) -> Any:
        if isinstance(shape, PrimitiveShape):
            return ZERO_VALUES[shape.kind]
        if isinstance(shape, SequenceShape):
            if shape.element is None:
                return []
            item = self._value_for(shape.element, visited)
            return [] if item is ABSENT else [item]
        if isinstance(shape, CompositeShape):
            return self.build(shape.target, visited)
        return ABSENT
