"""Shared fixtures: in-process stand-ins for the Node-backed compilers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from hamlbuild.compilers import Backends

LEGACY_PROLOGUE = "function anonymous(locals) "


class FakeFunction:
    def __init__(self, source: str, render: Callable[[Any], str]) -> None:
        self.source = source
        self._render = render
        self.calls: list[Any] = []

    def __call__(self, context: Any = None) -> str:
        self.calls.append(context)
        return self._render(context)


def render_fixture(source: str, context: Any) -> str:
    return f"<p>{source.strip()}</p><!-- {json.dumps(context, sort_keys=True)} -->"


class FakeHamlJs:
    """Compiles to a function whose body returns the template text."""

    def __init__(self, prologue: str = LEGACY_PROLOGUE) -> None:
        self.prologue = prologue
        self.compiled: list[str] = []
        self.functions: list[FakeFunction] = []

    @staticmethod
    def body(source: str) -> str:
        return "{\nreturn " + json.dumps(source.strip()) + ";\n}"

    def compile(self, source: str) -> FakeFunction:
        self.compiled.append(source)
        function = FakeFunction(
            self.prologue + self.body(source),
            lambda context: render_fixture(source, context),
        )
        self.functions.append(function)
        return function


class FakeHamlCoffee:
    def __init__(self) -> None:
        self.template_calls: list[tuple[str, str, str | None, dict]] = []
        self.compile_calls: list[tuple[str, dict]] = []

    def template(
        self, source: str, name: str, namespace: str | None, options: dict
    ) -> str:
        self.template_calls.append((source, name, namespace, dict(options)))
        return f"{namespace}['{name}'] = function(context) {{ return ''; }};"

    def compile(self, source: str, options: dict) -> FakeFunction:
        self.compile_calls.append((source, dict(options)))
        return FakeFunction(
            "function(context) {}",
            lambda context: f"<h1>{(context or {}).get('title', '')}</h1>",
        )


class FailingCompiler:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def compile(self, *args: Any) -> Any:
        raise self.exc

    def template(self, *args: Any) -> Any:
        raise self.exc


@pytest.fixture
def haml_js() -> FakeHamlJs:
    return FakeHamlJs()


@pytest.fixture
def haml_coffee() -> FakeHamlCoffee:
    return FakeHamlCoffee()


@pytest.fixture
def backends(haml_js: FakeHamlJs, haml_coffee: FakeHamlCoffee) -> Backends:
    return Backends(haml_js=haml_js, haml_coffee=haml_coffee)


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a template below tmp_path and return its path."""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
