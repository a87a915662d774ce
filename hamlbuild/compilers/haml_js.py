"""haml-js backend."""

from __future__ import annotations

from ..core.settings import Settings
from .function import TemplateFunction


class HamlJsCompiler:
    """Compiles HAML with embedded JavaScript through the ``haml`` package."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    def compile(self, source: str) -> TemplateFunction:
        return TemplateFunction(
            compile_op="haml-js.compile",
            render_op="haml-js.render",
            template=source,
            settings=self.settings,
        )
