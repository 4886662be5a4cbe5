"""Shared pytest fixtures and test helpers for dtoinit tests."""

from __future__ import annotations

from collections.abc import Hashable
from pathlib import Path

import pytest
from click.testing import CliRunner

from dtoinit.config.settings import DtoInitSettings
from dtoinit.domain.descriptors import TypeDescriptor


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty project directory with no dtoinit.toml above it."""
    monkeypatch.delenv("DTOINIT_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> DtoInitSettings:
    return DtoInitSettings.from_cli(project_root=project_root)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project root so the CLI discovers no config.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command test
    classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class DictAccessor:
    """In-memory accessor keyed by arbitrary identities.

    Counts describe calls so tests can assert on traversal.
    """

    def __init__(self, *descriptors: TypeDescriptor) -> None:
        self._descriptors = {d.identity: d for d in descriptors}
        self.calls: list[Hashable] = []

    def describe(self, type_id: Hashable) -> TypeDescriptor:
        self.calls.append(type_id)
        return self._descriptors[type_id]
