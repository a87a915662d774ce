"""Domain models for compile options and build configuration."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NAMESPACE = "window.HAML"


class Target(str, Enum):
    """What a compiled template is emitted as."""

    HTML = "html"
    JS = "js"


class Language(str, Enum):
    """Which compiler backend handles the template."""

    JS = "js"
    COFFEE = "coffee"


class Placement(str, Enum):
    """How JavaScript output is wrapped."""

    GLOBAL = "global"
    AMD = "amd"


class CompileOptions(BaseModel):
    """Options for compiling one or more templates.

    Unrecognized keys are kept as pass-through options for the backend.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    target: Target = Field(default=Target.HTML, description="Output target")
    language: Language = Field(default=Language.JS, description="Source language")
    placement: Placement = Field(
        default=Placement.GLOBAL, description="JavaScript output wrapping"
    )
    namespace: str = Field(
        default=DEFAULT_NAMESPACE, description="Global assignment target"
    )
    dependencies: dict[str, str] = Field(
        default_factory=dict, description="AMD dependencies (name -> module path)"
    )
    name: str | None = Field(default=None, description="Logical template name")
    context: Any = Field(default=None, description="Data passed when rendering HTML")
    filename: Path | None = Field(
        default=None, description="File under compilation (always injected)"
    )

    @property
    def passthrough(self) -> dict[str, Any]:
        """Backend options that hamlbuild does not interpret itself."""
        return dict(self.model_extra or {})


class FileMapping(BaseModel):
    """A set of source patterns compiled into one destination file."""

    src: list[str] = Field(..., description="Source paths or glob patterns")
    dest: Path = Field(..., description="Destination file path")

    @field_validator("src", mode="before")
    @classmethod
    def _coerce_src(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class BuildTarget(BaseModel):
    """A named build target."""

    options: dict[str, Any] = Field(
        default_factory=dict, description="Options overriding the task options"
    )
    files: list[FileMapping] = Field(..., min_length=1, description="File mappings")


class BuildConfig(BaseModel):
    """Contents of a build file."""

    options: dict[str, Any] = Field(
        default_factory=dict, description="Task-level default options"
    )
    targets: dict[str, BuildTarget] = Field(
        ..., min_length=1, description="Build targets by name"
    )
