"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, protodocs.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from protodocs.domain.types import DuplicatePolicy

# Upper bound on closure depth accepted from config and env.
MAX_CLOSURE_DEPTH_LIMIT = 4096


class ResolutionConfig(BaseModel):
    """[resolution] section."""

    model_config = {"frozen": True}

    max_closure_depth: int = Field(default=256, ge=1, le=MAX_CLOSURE_DEPTH_LIMIT)
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    proper_names: dict[str, str] = Field(default_factory=lambda: {"lnd": "LND"})
