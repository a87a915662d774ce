"""Template compiler backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.settings import Settings
from .function import TemplateFunction
from .haml_coffee import HamlCoffeeCompiler
from .haml_js import HamlJsCompiler
from .node import NodeBridgeError


@dataclass(frozen=True)
class Backends:
    """The compiler used for each source language."""

    haml_js: Any
    haml_coffee: Any

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Backends:
        return cls(
            haml_js=HamlJsCompiler(settings),
            haml_coffee=HamlCoffeeCompiler(settings),
        )


__all__ = [
    "Backends",
    "HamlCoffeeCompiler",
    "HamlJsCompiler",
    "NodeBridgeError",
    "TemplateFunction",
]
