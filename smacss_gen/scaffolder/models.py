"""Pydantic v2 models for the SMACSS project generator.

Defines the typed stages of the scaffolding pipeline: the user's answers, the
generation plan derived from them, and the post-install plan that decides what
happens after the files are on disk.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from smacss_gen.utils import normalize_app_name


class InvalidAnswerSet(Exception):
    """Raised when the answers cannot describe a project (unknown app type, empty name)."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class AppType(str, Enum):
    """The three project archetypes the generator can scaffold."""
    SIMPLE_WEB_APP = "typeSimpleWebApp"
    FULL_PACK_WEB_APP = "typeFullPackWebApp"
    ANGULAR_APP = "typeAngularApp"

    @property
    def label(self) -> str:
        return _APP_TYPE_LABELS[self]

    @property
    def has_partials(self) -> bool:
        """Full pack and Angular apps get header/footer partials, a build dir and bower."""
        return self is not AppType.SIMPLE_WEB_APP


_APP_TYPE_LABELS: dict[AppType, str] = {
    AppType.SIMPLE_WEB_APP: "Simple Web App",
    AppType.FULL_PACK_WEB_APP: "Full Pack Web App",
    AppType.ANGULAR_APP: "Angular App",
}


# ---------------------------------------------------------------------------
# Answer models
# ---------------------------------------------------------------------------

class FeatureFlags(BaseModel):
    """Optional libraries. Collected for FULL_PACK_WEB_APP and ANGULAR_APP only."""
    model_config = ConfigDict(frozen=True)

    include_jquery: bool = Field(default=False, description="Add jQuery")
    include_modernizr: bool = Field(default=False, description="Add Modernizr")


class ModuleFlags(BaseModel):
    """Optional Angular modules. Collected for ANGULAR_APP only.

    Field order is the order the module tokens appear in the generated
    dependency list.
    """
    model_config = ConfigDict(frozen=True)

    route: bool = Field(default=False, description="ngRoute")
    resource: bool = Field(default=False, description="ngResource")
    sanitize: bool = Field(default=False, description="ngSanitize")
    animate: bool = Field(default=False, description="ngAnimate")


MODULE_TOKENS: dict[str, str] = {
    "route": "'ngRoute'",
    "resource": "'ngResource'",
    "sanitize": "'ngSanitize'",
    "animate": "'ngAnimate'",
}


class AnswerSet(BaseModel):
    """Normalized selections for one generator run.

    ``app_name`` is normalized to a camel-cased slug on construction.  Flags
    for an app type that does not collect them are reset to all-false, so a
    caller passing explicit ``False`` values and a caller passing nothing
    produce the same answers.
    """
    model_config = ConfigDict(frozen=True)

    app_name: str
    app_type: AppType
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    modules: ModuleFlags = Field(default_factory=ModuleFlags)

    @field_validator("app_name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        normalized = normalize_app_name(value)
        if not normalized:
            raise ValueError(f"app name {value!r} has no usable characters")
        return normalized

    @model_validator(mode="before")
    @classmethod
    def _drop_inapplicable_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        try:
            app_type = AppType(data.get("app_type"))
        except ValueError:
            # field validation reports the bad app type
            return data
        data = dict(data)
        if not app_type.has_partials:
            data.pop("features", None)
        if app_type is not AppType.ANGULAR_APP:
            data.pop("modules", None)
        return data

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "AnswerSet":
        """Validate a raw answer dict, converting validation failures to ``InvalidAnswerSet``."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise InvalidAnswerSet(str(exc)) from exc


# ---------------------------------------------------------------------------
# Plan models
# ---------------------------------------------------------------------------

class TemplateRef(BaseModel):
    """One file to emit: where its content comes from and where it goes."""
    model_config = ConfigDict(frozen=True)

    source_key: str = Field(..., description="Path inside the template directory")
    dest_path: str = Field(..., description="Path relative to the project root")
    is_templated: bool = Field(default=False, description="Render with context instead of copying bytes")


class GenerationPlan(BaseModel):
    """Everything the emitter needs, derived from an ``AnswerSet`` before any write."""
    app_name: str
    directories: list[str] = Field(default_factory=list)
    files: list[TemplateRef] = Field(default_factory=list)
    context: dict[str, Any] = Field(default_factory=dict)

    def file_for(self, dest_path: str) -> TemplateRef | None:
        """Return the entry writing *dest_path*, or ``None``."""
        for ref in self.files:
            if ref.dest_path == dest_path:
                return ref
        return None

    @property
    def dest_paths(self) -> list[str]:
        return [ref.dest_path for ref in self.files]


class PostInstallPlan(BaseModel):
    """What happens once the project tree exists."""
    install_command: str = Field(..., description="Human-readable install command")
    auto_run: bool = Field(..., description="Run the install steps instead of printing instructions")
    app_path: Path = Field(..., description="Absolute path of the generated project")
    install_steps: list[list[str]] = Field(default_factory=list)
    serve_command: list[str] = Field(default_factory=list)
    instructions: str = ""
    show_messages: bool = True
