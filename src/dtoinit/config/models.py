"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dtoinit.toml only contains
overrides.  A project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dtoinit.domain.types import Mode

# --- dtoinit.toml sections ---


class InitConfig(BaseModel):
    """[init] section."""

    model_config = {"frozen": True}

    mode: Mode = Mode.DIRECT
    import_paths: list[str] = Field(default_factory=lambda: ["."])


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0)
    sort_keys: bool = False
