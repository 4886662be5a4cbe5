"""Reflection-based type accessor for Python DTO classes.

Three kinds of class are understood:

- pydantic models: fields from ``model_fields`` (aliases honored, frozen
  models and frozen fields are read-only).
- dataclasses: fields from :func:`dataclasses.fields` (frozen dataclasses
  are read-only).
- plain classes: annotated attributes plus annotated ``property`` getters;
  a property without a setter is read-only.

Type hints are classified once per field into a closed :data:`Shape`.
Annotations are resolved field by field: one that cannot be evaluated
(a name imported only under ``TYPE_CHECKING``, a typo) leaves that field
without a shape instead of failing the whole class.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import typing
from collections.abc import Hashable, MutableSequence, Sequence
from enum import Enum
from types import NoneType, UnionType
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from pydantic import AliasChoices, AliasPath, BaseModel
from pydantic.errors import PydanticUndefinedAnnotation
from pydantic.fields import FieldInfo

from dtoinit.domain.descriptors import (
    CompositeShape,
    FieldDescriptor,
    PrimitiveShape,
    SequenceShape,
    Shape,
    TypeDescriptor,
)
from dtoinit.domain.errors import DescriptorError
from dtoinit.domain.types import PrimitiveKind

logger = logging.getLogger(__name__)

_PRIMITIVES: dict[type, PrimitiveKind] = {
    str: PrimitiveKind.TEXT,
    int: PrimitiveKind.INTEGER,
    float: PrimitiveKind.FLOAT,
    bool: PrimitiveKind.BOOLEAN,
}

_SEQUENCE_ORIGINS: tuple[Any, ...] = (list, Sequence, MutableSequence)

_ANNOTATION_ERRORS = (NameError, AttributeError, SyntaxError, TypeError)


class ReflectionAccessor:
    """Describes Python classes by introspecting their declarations.

    Descriptors are cached per class; describing is idempotent, so the cache
    is safe to share between concurrent calls.
    """

    def __init__(self) -> None:
        self._cache: dict[Hashable, TypeDescriptor] = {}

    def describe(self, type_id: Hashable) -> TypeDescriptor:
        cached = self._cache.get(type_id)
        if cached is not None:
            return cached
        descriptor = describe_class(type_id)
        self._cache[type_id] = descriptor
        return descriptor


def describe_class(cls: Any) -> TypeDescriptor:
    """Build a :class:`TypeDescriptor` for *cls*.

    Raises:
        DescriptorError: If *cls* is not a class, or is a pydantic model
            that cannot be completed.
    """
    if not isinstance(cls, type):
        raise DescriptorError(repr(cls), "not a class")

    if is_pydantic_model(cls):
        fields = _pydantic_fields(cls)
    elif dataclasses.is_dataclass(cls):
        fields = _dataclass_fields(cls)
    else:
        fields = _plain_fields(cls)
    return TypeDescriptor(identity=cls, name=cls.__name__, fields=tuple(fields))


def classify(hint: Any) -> Shape | None:
    """Classify a resolved type hint, or return None if unsupported."""
    if hint is Any:
        return None
    origin = get_origin(hint)
    if origin is Annotated:
        return classify(get_args(hint)[0])

    if origin is Union or origin is UnionType:
        members = [arg for arg in get_args(hint) if arg is not NoneType]
        if len(members) != 1:
            return None
        return classify(members[0])

    if origin in _SEQUENCE_ORIGINS or hint in _SEQUENCE_ORIGINS:
        args = get_args(hint)
        if len(args) != 1:
            return SequenceShape()
        return SequenceShape(element=classify(args[0]))

    if origin is not None or not isinstance(hint, type):
        return None

    kind = _PRIMITIVES.get(hint)
    if kind is not None:
        return PrimitiveShape(kind)
    if is_composite(hint):
        return CompositeShape(hint)
    return None


def is_pydantic_model(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, BaseModel) and cls is not BaseModel


def is_composite(cls: type) -> bool:
    """Whether *cls* is a DTO the builder can expand.

    Plain classes qualify only through annotated attributes or annotated
    property getters; standard library value types (``UUID``, ``Path``,
    ``datetime``) never do.
    """
    if cls in _PRIMITIVES or issubclass(cls, Enum):
        return False
    if is_pydantic_model(cls) or dataclasses.is_dataclass(cls):
        return True
    if _is_stdlib(cls):
        return False
    return any(_own_field_names(klass) for klass in _user_mro(cls))


# ---------------------------------------------------------------------------
# Per-kind field extraction
# ---------------------------------------------------------------------------


def _pydantic_fields(cls: type[BaseModel]) -> list[FieldDescriptor]:
    if not cls.__pydantic_complete__:
        try:
            cls.model_rebuild()
        except PydanticUndefinedAnnotation as exc:
            raise DescriptorError(cls.__name__, str(exc)) from exc

    model_frozen = bool(cls.model_config.get("frozen", False))
    by_name = bool(
        cls.model_config.get("populate_by_name") or cls.model_config.get("validate_by_name")
    )
    fields: list[FieldDescriptor] = []
    for name, info in cls.model_fields.items():
        key = _input_key(name, info)
        shape = classify(info.annotation)
        if key is None:
            # Nested AliasPath: no flat key the converter accepts.
            key = name
            if not by_name:
                shape = None
        fields.append(
            FieldDescriptor(
                name=name,
                shape=shape,
                key=key,
                writable=not (model_frozen or info.frozen),
            )
        )
    return fields


def _input_key(name: str, info: FieldInfo) -> str | None:
    """The flat input key pydantic validates a field from.

    Returns None when the only accepted inputs are nested alias paths.
    """
    alias = info.validation_alias
    if alias is None:
        return info.alias or name
    if isinstance(alias, str):
        return alias
    choices = alias.choices if isinstance(alias, AliasChoices) else [alias]
    for choice in choices:
        if isinstance(choice, str):
            return choice
        if isinstance(choice, AliasPath) and len(choice.path) == 1:
            first = choice.path[0]
            if isinstance(first, str):
                return first
    return None


def _dataclass_fields(cls: type) -> list[FieldDescriptor]:
    hints = _class_hints(cls)
    frozen = cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return [
        FieldDescriptor(name=f.name, shape=classify(hints.get(f.name)), writable=not frozen)
        for f in dataclasses.fields(cls)
    ]


def _plain_fields(cls: type) -> list[FieldDescriptor]:
    hints = _class_hints(cls)
    by_name: dict[str, FieldDescriptor] = {}
    for name, hint in hints.items():
        if name.startswith("_") or get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        by_name[name] = FieldDescriptor(name=name, shape=classify(hint))

    for klass in _user_mro(cls):
        for name, attr in vars(klass).items():
            if not _is_field_property(name, attr):
                continue
            by_name[name] = FieldDescriptor(
                name=name,
                shape=classify(_return_hint(attr.fget)),
                writable=attr.fset is not None,
            )
    return list(by_name.values())


# ---------------------------------------------------------------------------
# Annotation resolution
# ---------------------------------------------------------------------------


def _class_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations of *cls* and its bases, None where unresolvable."""
    try:
        return typing.get_type_hints(cls)
    except _ANNOTATION_ERRORS:
        pass

    hints: dict[str, Any] = {}
    for klass in _user_mro(cls):
        module = sys.modules.get(klass.__module__)
        globalns = vars(module) if module is not None else {}
        localns = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _evaluate(annotation, globalns, localns, owner=klass)
    return hints


def _return_hint(func: Any) -> Any:
    try:
        return typing.get_type_hints(func).get("return")
    except _ANNOTATION_ERRORS:
        annotation = inspect.get_annotations(func)["return"]
        return _evaluate(annotation, func.__globals__, None, owner=func)


def _evaluate(
    annotation: Any, globalns: dict[str, Any], localns: dict[str, Any] | None, *, owner: Any
) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except _ANNOTATION_ERRORS as exc:
        logger.debug("Unresolvable annotation %r on %s (%s)", annotation, owner.__qualname__, exc)
        return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _user_mro(cls: type) -> list[type]:
    """Base-first MRO without ``object``."""
    return [klass for klass in reversed(cls.__mro__) if klass is not object]


def _is_stdlib(cls: type) -> bool:
    return cls.__module__.partition(".")[0] in sys.stdlib_module_names


def _is_field_property(name: str, attr: Any) -> bool:
    """A public property whose getter is a function with a return annotation."""
    if name.startswith("_") or not isinstance(attr, property):
        return False
    fget = attr.fget
    return inspect.isfunction(fget) and "return" in inspect.get_annotations(fget)


def _own_field_names(klass: type) -> list[str]:
    names = [name for name in inspect.get_annotations(klass) if not name.startswith("_")]
    names.extend(name for name, attr in vars(klass).items() if _is_field_property(name, attr))
    return names
