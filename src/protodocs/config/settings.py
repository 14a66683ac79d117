"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``PROTODOCS_*`` prefix
  3. TOML file: ``protodocs.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` fed by
:func:`find_config`, which walks up from the working directory the way git
locates ``.git/``. ``PROTODOCS_CONFIG`` names a file directly and skips the walk.
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from protodocs.config.models import DisplayConfig, ResolutionConfig

CONFIG_FILENAME = "protodocs.toml"
CONFIG_ENV_VAR = "PROTODOCS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the ``protodocs.toml`` that applies to *start* (default: cwd).

    A ``PROTODOCS_CONFIG`` path wins outright; when it names a missing file
    no config applies, even if one sits in the directory tree.
    """
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``protodocs.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            descriptor = self._data.get("descriptor_path")
            if descriptor and not Path(descriptor).is_absolute():
                self._data["descriptor_path"] = str(toml_path.parent / descriptor)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ProtodocsSettings(BaseSettings):
    """Unified settings for the protodocs CLI.

    Attributes:
        descriptor_path: JSON descriptor to load. Relative paths in
            ``protodocs.toml`` resolve against the config file's directory.
        daemon_name: Daemon identifier; defaults to the descriptor file stem.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROTODOCS_",
        "env_nested_delimiter": "__",
    }

    descriptor_path: Path | None = None
    daemon_name: str | None = None
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    resolution: ResolutionConfig = Field(default_factory=ResolutionConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @property
    def resolved_daemon_name(self) -> str:
        """Explicit daemon name, else the descriptor stem, else ``daemon``."""
        if self.daemon_name:
            return self.daemon_name
        if self.descriptor_path is not None:
            return self.descriptor_path.stem
        return "daemon"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> ProtodocsSettings:
        """Construct settings from CLI invocation.

        Discovers ``protodocs.toml`` via walk-up from *start_dir* (or uses an
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides. Flags passed as None are dropped so lower layers apply.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start_dir)

        overrides = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None
