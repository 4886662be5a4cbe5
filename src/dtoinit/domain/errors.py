"""Exception hierarchy for skeleton generation.

Cycle truncation and unresolvable field shapes are never errors; they are
absorbed by the builder as omitted fields.  Only the conditions below abort
a top-level call.
"""

from __future__ import annotations


class DtoInitError(Exception):
    """Base class for all dtoinit failures."""

    code = "DTOINIT_FAILED"

    def __init__(self, type_name: str, message: str) -> None:
        super().__init__(message)
        self.type_name = type_name


class ConstructionError(DtoInitError):
    """Direct mode could not construct an instance or assign a field."""

    code = "CONSTRUCTION_FAILED"

    def __init__(self, type_name: str, reason: str = "") -> None:
        msg = f"Failed to construct default instance of {type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(type_name, msg)


class ConversionError(DtoInitError):
    """The structural converter refused the generated document."""

    code = "CONVERSION_FAILED"

    def __init__(self, type_name: str, reason: str = "") -> None:
        msg = f"Failed to convert default document into {type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(type_name, msg)


class DescriptorError(DtoInitError):
    """A type could not be described (bad annotations, not a class)."""

    code = "DESCRIPTOR_FAILED"

    def __init__(self, type_name: str, reason: str = "") -> None:
        msg = f"Cannot describe type {type_name}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(type_name, msg)


class TargetResolutionError(DtoInitError):
    """A dotted ``module:Class`` target could not be imported."""

    code = "TARGET_NOT_FOUND"

    def __init__(self, target: str, reason: str = "") -> None:
        msg = f"Cannot resolve target {target!r}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(target, msg)
