"""Compiled template functions returned by the backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from ..core.settings import Settings
from .node import run_bridge_text


@dataclass(frozen=True)
class TemplateFunction:
    """A compiled template.

    Calling the object renders the template against a context. ``source``
    is the JavaScript source text of the compiled function; it is fetched
    on first access only, so rendering to HTML costs one bridge call.
    """

    compile_op: str
    render_op: str
    template: str
    options: dict[str, Any] = field(default_factory=dict)
    settings: Settings | None = None

    @cached_property
    def source(self) -> str:
        return run_bridge_text(
            self.compile_op,
            settings=self.settings,
            source=self.template,
            options=self.options or None,
        )

    def __call__(self, context: Any = None) -> str:
        return run_bridge_text(
            self.render_op,
            settings=self.settings,
            source=self.template,
            options=self.options or None,
            context=context,
        )
