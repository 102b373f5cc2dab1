"""SMACSS generator configuration.

Centralised, typed configuration for a generator run.  All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class InstallConfig(BaseModel):
    """Commands used after the project tree is written."""

    npm_command: str = Field(default="npm")
    bower_command: str = Field(default="bower")
    serve_command: str = Field(default="gulp", description="Build/dev-server task started after install")
    timeout: int = Field(default=600, ge=10, description="Per-step install timeout in seconds")
    start_server: bool = Field(default=True, description="Start the dev server once install succeeds")


class Config(BaseModel):
    """Global generator configuration.

    Instances are typically created once by the CLI entry point (environment
    first, then command-line flags on top) and passed to ``Wizard``.
    """

    output_dir: Path = Field(default=Path("."))
    skip_install: bool = Field(default=False, description="Print instructions instead of installing")
    skip_install_message: bool = Field(default=False, description="Suppress post-install messaging")
    skip_welcome_message: bool = Field(default=False)
    app_suffix: str = Field(default="", description="Suffix appended to the Angular module name")
    install: InstallConfig = Field(default_factory=InstallConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SMACSS_OUTPUT_DIR, SMACSS_SKIP_INSTALL, SMACSS_SKIP_INSTALL_MESSAGE,
            SMACSS_SKIP_WELCOME_MESSAGE, SMACSS_APP_SUFFIX,
            SMACSS_NPM_COMMAND, SMACSS_BOWER_COMMAND, SMACSS_SERVE_COMMAND,
            SMACSS_INSTALL_TIMEOUT.
        """
        install_kwargs: dict[str, Any] = {}
        if os.environ.get("SMACSS_NPM_COMMAND"):
            install_kwargs["npm_command"] = os.environ["SMACSS_NPM_COMMAND"]
        if os.environ.get("SMACSS_BOWER_COMMAND"):
            install_kwargs["bower_command"] = os.environ["SMACSS_BOWER_COMMAND"]
        if os.environ.get("SMACSS_SERVE_COMMAND"):
            install_kwargs["serve_command"] = os.environ["SMACSS_SERVE_COMMAND"]
        if os.environ.get("SMACSS_INSTALL_TIMEOUT"):
            install_kwargs["timeout"] = int(os.environ["SMACSS_INSTALL_TIMEOUT"])

        return cls(
            output_dir=Path(os.environ.get("SMACSS_OUTPUT_DIR", ".")),
            skip_install=_env_flag("SMACSS_SKIP_INSTALL"),
            skip_install_message=_env_flag("SMACSS_SKIP_INSTALL_MESSAGE"),
            skip_welcome_message=_env_flag("SMACSS_SKIP_WELCOME_MESSAGE"),
            app_suffix=os.environ.get("SMACSS_APP_SUFFIX", ""),
            install=InstallConfig(**install_kwargs),
        )


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY
