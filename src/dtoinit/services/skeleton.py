"""SkeletonService — resolve a target class and build its default value.

Bridges the CLI to :class:`DtoInitializer`: targets arrive as dotted
strings, results leave as JSON-ready :class:`ServiceResult` payloads, and
every :class:`DtoInitError` becomes a structured failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pydantic_core import to_jsonable_python

from dtoinit.domain.errors import DtoInitError
from dtoinit.domain.types import Mode
from dtoinit.infrastructure.loader import resolve_target
from dtoinit.infrastructure.reflection import is_composite
from dtoinit.services.initializer import BuildOutcome, DtoInitializer
from dtoinit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from dtoinit.config.settings import DtoInitSettings
    from dtoinit.domain.descriptors import TypeAccessor

log = structlog.get_logger(__name__)

_SCALARS = (str, int, float, bool, type(None))


class SkeletonService:
    """CLI-facing operations: ``skeleton``, ``tree``, and ``describe``."""

    def __init__(
        self,
        settings: DtoInitSettings,
        initializer: DtoInitializer | None = None,
    ) -> None:
        self._settings = settings
        self._initializer = initializer or DtoInitializer()

    def skeleton(self, target: str, mode: Mode | None = None) -> ServiceResult:
        """Default instance of *target*, rendered as a JSON document."""
        mode = mode or self._settings.init.mode
        try:
            cls = self._resolve(target)
            outcome = self._initializer.run(cls, mode)
        except DtoInitError as exc:
            return self._failure("skeleton", exc)

        log.debug("skeleton.built", type=cls.__name__, mode=str(mode))
        return self._document_result("skeleton", cls, outcome, mode=mode)

    def tree(self, target: str) -> ServiceResult:
        """Structural document for *target* before conversion."""
        try:
            cls = self._resolve(target)
            outcome = self._initializer.tree(cls)
        except DtoInitError as exc:
            return self._failure("tree", exc)

        log.debug("tree.built", type=cls.__name__)
        return self._document_result("tree", cls, outcome)

    def describe(self, target: str) -> ServiceResult:
        """Field-by-field view of how *target* will be expanded."""
        try:
            cls = self._resolve(target)
            descriptor = self._initializer.describe(cls)
        except DtoInitError as exc:
            return self._failure("describe", exc)

        fields = [
            {
                "name": fd.name,
                "key": fd.key,
                "shape": str(fd.shape.shape_kind) if fd.shape is not None else None,
                "type": fd.shape.describe() if fd.shape is not None else None,
                "writable": fd.writable,
            }
            for fd in descriptor.fields
        ]
        return ServiceResult(
            ok=True,
            op="describe",
            data={"type": descriptor.name, "count": len(fields), "fields": fields},
        )

    # ── Internals ─────────────────────────────────────────────────────

    def _resolve(self, target: str) -> type:
        return resolve_target(target, self._settings.search_paths)

    def _document_result(
        self,
        op: str,
        cls: type,
        outcome: BuildOutcome,
        *,
        mode: Mode | None = None,
    ) -> ServiceResult:
        data: dict[str, Any] = {"type": cls.__name__}
        if mode is not None:
            data["mode"] = str(mode)
        data["value"] = to_document(outcome.value, self._initializer.accessor)
        warnings = [str(t) for t in outcome.truncations]
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    @staticmethod
    def _failure(op: str, exc: DtoInitError) -> ServiceResult:
        log.debug("operation.failed", op=op, code=exc.code, type=exc.type_name)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))


def to_document(value: Any, accessor: TypeAccessor) -> Any:
    """Convert a built value into JSON-ready data.

    DTO instances are walked through their descriptors so both modes render
    under the same keys; unset attributes are left out.
    """
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, (list, tuple)):
        return [to_document(item, accessor) for item in value]
    if isinstance(value, dict):
        return {str(k): to_document(v, accessor) for k, v in value.items()}
    if is_composite(type(value)):
        descriptor = accessor.describe(type(value))
        return {
            fd.key: to_document(getattr(value, fd.name), accessor)
            for fd in descriptor.fields
            if hasattr(value, fd.name)
        }
    return to_jsonable_python(value, fallback=str)
