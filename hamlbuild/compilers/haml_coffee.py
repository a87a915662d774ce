"""haml-coffee backend."""

from __future__ import annotations

from typing import Any

from ..core.settings import Settings
from .function import TemplateFunction
from .node import run_bridge_text


class HamlCoffeeCompiler:
    """Compiles HAML with embedded CoffeeScript through ``haml-coffee``."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    def template(
        self, source: str, name: str, namespace: str | None, options: dict[str, Any]
    ) -> str:
        """Return the JavaScript source of a named template."""
        return run_bridge_text(
            "haml-coffee.template",
            settings=self.settings,
            source=source,
            name=name,
            namespace=namespace,
            options=options,
        )

    def compile(self, source: str, options: dict[str, Any]) -> TemplateFunction:
        return TemplateFunction(
            compile_op="haml-coffee.compile",
            render_op="haml-coffee.render",
            template=source,
            options=dict(options),
            settings=self.settings,
        )
