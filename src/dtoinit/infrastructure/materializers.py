"""Materializers — how the builder assembles each expanded type.

- :class:`StructuralMaterializer` writes every field into a plain ``dict``
  (a JSON-like document).  :class:`PydanticConverter` then maps that
  document onto the target class.
- :class:`DirectMaterializer` constructs the target class with no
  arguments and assigns each field with ``setattr``.  Fields without a
  write accessor are skipped and keep their construction-time value.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUndefinedAnnotation, PydanticUserError

from dtoinit.domain.descriptors import FieldDescriptor, TypeDescriptor
from dtoinit.domain.errors import ConstructionError, ConversionError


class StructuralMaterializer:
    """Assemble fields into a keyed document under each field's key."""

    def accepts(self, field: FieldDescriptor) -> bool:
        return True

    def begin(self, descriptor: TypeDescriptor) -> dict[str, Any]:
        return {}

    def write(self, target: dict[str, Any], field: FieldDescriptor, value: Any) -> None:
        target[field.key] = value


class DirectMaterializer:
    """Assemble fields onto a live instance through their write accessors."""

    def accepts(self, field: FieldDescriptor) -> bool:
        return field.writable

    def begin(self, descriptor: TypeDescriptor) -> Any:
        cls = descriptor.identity
        if not callable(cls):
            raise ConstructionError(descriptor.name, "type is not constructible")
        try:
            return cls()
        except Exception as exc:
            reason = f"no-argument construction failed ({exc})"
            raise ConstructionError(descriptor.name, reason) from exc

    def write(self, target: Any, field: FieldDescriptor, value: Any) -> None:
        try:
            setattr(target, field.name, value)
        except Exception as exc:
            reason = f"cannot assign field {field.name!r} ({exc})"
            raise ConstructionError(type(target).__name__, reason) from exc


class PydanticConverter:
    """Generic document-to-object converter backed by ``TypeAdapter``.

    Adapters are cached per target class.  Fields missing from the document
    fall back to the class's own defaults.
    """

    def __init__(self) -> None:
        self._adapters: dict[type, TypeAdapter[Any]] = {}

    def convert(self, document: dict[str, Any], cls: type) -> Any:
        try:
            adapter = self._adapter_for(cls)
            return adapter.validate_python(document)
        except ValidationError as exc:
            reason = f"{exc.error_count()} validation error(s)"
            raise ConversionError(cls.__name__, reason) from exc
        except PydanticUndefinedAnnotation as exc:
            raise ConversionError(cls.__name__, f"unresolvable annotation ({exc})") from exc
        except PydanticUserError as exc:
            raise ConversionError(cls.__name__, "unsupported target class") from exc

    def _adapter_for(self, cls: type) -> TypeAdapter[Any]:
        adapter = self._adapters.get(cls)
        if adapter is None:
            adapter = TypeAdapter(cls)
            self._adapters[cls] = adapter
        return adapter
