"""Error kinds raised by hamlbuild."""

from __future__ import annotations


class HamlBuildError(Exception):
    """Base class for fatal build failures."""


class ConfigurationError(HamlBuildError):
    """Raised when an option or the build file holds an unsupported value."""


class CompilationError(HamlBuildError):
    """Raised when a template fails to read, compile or evaluate."""
