"""CLI argument parsers and validators."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
import yaml


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_dependency(value: str) -> tuple[str, str]:
    """Parse a dependency argument in format NAME=PATH."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be NAME=PATH, got: {value!r}")
    name, module_path = value.split("=", 1)
    if not name or not module_path:
        raise typer.BadParameter(f"Must be NAME=PATH, got: {value!r}")
    return name, module_path


def parse_option(value: str) -> tuple[str, Any]:
    """Parse a pass-through option in format KEY=VALUE.

    VALUE is decoded as JSON when possible and kept as a string otherwise.
    """
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, raw = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Missing option name in: {value!r}")
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError:
        return key, raw


def parse_context(value: str) -> Any:
    """Parse an inline JSON rendering context."""
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON context: {e}") from e


def load_context_file(path: Path) -> Any:
    """Load a rendering context from a JSON or YAML file."""
    if not path.is_file():
        raise typer.BadParameter(f"Context file not found: {path}")
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Invalid context file {path}: {e}") from e
