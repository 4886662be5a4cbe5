"""Classification enums for fields and materialization modes."""

from __future__ import annotations

from enum import StrEnum


class PrimitiveKind(StrEnum):
    """Scalar kinds that have a zero value."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


class ShapeKind(StrEnum):
    """Three-way split of a field's declared type."""

    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    COMPOSITE = "composite"


class Mode(StrEnum):
    """How the default value is materialized."""

    DIRECT = "direct"
    STRUCTURAL = "structural"


ZERO_VALUES: dict[PrimitiveKind, object] = {
    PrimitiveKind.TEXT: "",
    PrimitiveKind.INTEGER: 0,
    PrimitiveKind.FLOAT: 0.0,
    PrimitiveKind.BOOLEAN: False,
}
