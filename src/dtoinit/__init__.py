"""dtoinit — fully-populated, cycle-safe default instances of DTO classes."""

from dtoinit.domain.descriptors import ABSENT, FieldDescriptor, TypeDescriptor, VisitedSet
from dtoinit.domain.errors import (
    ConstructionError,
    ConversionError,
    DescriptorError,
    DtoInitError,
    TargetResolutionError,
)
from dtoinit.services.initializer import (
    BuildOutcome,
    DtoInitializer,
    default_tree,
    describe,
    init,
    init_direct,
    init_structural,
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "BuildOutcome",
    "ConstructionError",
    "ConversionError",
    "DescriptorError",
    "DtoInitError",
    "DtoInitializer",
    "FieldDescriptor",
    "TargetResolutionError",
    "TypeDescriptor",
    "VisitedSet",
    "__version__",
    "default_tree",
    "describe",
    "init",
    "init_direct",
    "init_structural",
]
