"""Resolve ``package.module:ClassName`` targets to classes."""

from __future__ import annotations

import importlib
import sys
from collections.abc import Iterable
from pathlib import Path

from dtoinit.domain.errors import TargetResolutionError


def resolve_target(target: str, search_paths: Iterable[Path] = ()) -> type:
    """Import and return the class named by *target*.

    Accepts ``pkg.mod:Outer.Inner`` or ``pkg.mod.ClassName``.  Entries in
    *search_paths* are prepended to ``sys.path`` (once) before importing.

    Raises:
        TargetResolutionError: If the module or attribute is missing, or
            the attribute is not a class.
    """
    module_name, _, attr_path = target.strip().partition(":")
    if not attr_path:
        module_name, _, attr_path = module_name.rpartition(".")
    if not module_name or not attr_path:
        raise TargetResolutionError(target, "expected 'module:ClassName'")

    for path in search_paths:
        entry = str(path)
        if entry not in sys.path:
            sys.path.insert(0, entry)

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetResolutionError(target, str(exc)) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise TargetResolutionError(target, f"no attribute {part!r}") from exc

    if not isinstance(obj, type):
        raise TargetResolutionError(target, "not a class")
    return obj
