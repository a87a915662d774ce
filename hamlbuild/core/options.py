"""Parsing, validation and per-file specialization of compile options."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from .errors import ConfigurationError
from .models import CompileOptions, Language, Placement, Target


# Keys hamlbuild consumes itself; they never reach a backend.
HOUSEKEEPING_KEYS = frozenset({"language", "target", "name", "context"})

_CHOICES: tuple[tuple[str, type[Enum], str], ...] = (
    ("language", Language, "Language {value} is not a valid source language for HAML"),
    ("target", Target, "Target {value} is not a valid destination target"),
    ("placement", Placement, "Placement {value} is not a valid destination placement"),
)


def _choices_text(enum_type: type[Enum]) -> str:
    values = sorted(member.value for member in enum_type)
    return ", ".join(values[:-1]) + " and " + values[-1]


def validate_choices(raw: Mapping[str, Any]) -> None:
    """Reject unsupported enum values before any compilation starts.

    Raises:
        ConfigurationError: naming the offending value and the valid choices
    """
    for key, enum_type, message in _CHOICES:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, enum_type):
            continue
        if value not in [member.value for member in enum_type]:
            raise ConfigurationError(
                f"{message.format(value=value)}; choices are: {_choices_text(enum_type)}"
            )


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge option layers; later layers win key by key."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def parse_options(raw: Mapping[str, Any] | CompileOptions | None = None) -> CompileOptions:
    """Build a validated, immutable options model from a raw mapping."""
    if isinstance(raw, CompileOptions):
        return raw
    data = dict(raw or {})
    validate_choices(data)
    try:
        return CompileOptions.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options: {e}") from e


def for_file(options: CompileOptions, path: Path) -> CompileOptions:
    """Derive the options used for a single file.

    The result is a deep copy with ``filename`` set to ``path``, so nothing
    done while compiling one file is visible to the next.
    """
    return options.model_copy(update={"filename": Path(path)}, deep=True)


def template_name(options: CompileOptions, path: Path) -> str:
    """Logical template name: the ``name`` option or the file stem."""
    if options.name is not None:
        return options.name
    return Path(path).stem


def backend_options(options: CompileOptions) -> dict[str, Any]:
    """Options handed to the haml-coffee compiler.

    Contains ``filename``, ``placement``, ``dependencies`` and the
    pass-through options. ``namespace`` travels as its own argument and the
    housekeeping keys are never sent.
    """
    compiler_options = {
        key: value
        for key, value in options.passthrough.items()
        if key not in HOUSEKEEPING_KEYS and key != "namespace"
    }
    compiler_options["placement"] = options.placement.value
    compiler_options["dependencies"] = dict(options.dependencies)
    if options.filename is not None:
        compiler_options["filename"] = str(options.filename)
    return compiler_options


def describe(options: CompileOptions) -> str:
    """One-line rendering of options for verbose logs."""
    flags = options.model_dump(mode="json", exclude={"context"})
    return ", ".join(f"{key}={value!r}" for key, value in flags.items())
