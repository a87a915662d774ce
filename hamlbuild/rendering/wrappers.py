"""Output wrapping for JavaScript-target templates.

A compiled haml-js function is turned into an anonymous ``function(locals)``
and then either assigned into a global namespace or returned from an AMD
``define`` call.
"""

from __future__ import annotations

import posixpath
import re
from typing import Mapping

from jinja2 import Environment, StrictUndefined

# Prologues produced by ``new Function("locals", ...).toString()``. Older V8
# releases emit the first form; current releases break the parameter list.
KNOWN_PROLOGUES = (
    "function anonymous(locals) ",
    "function anonymous(locals\n) ",
)
ANONYMOUS_PROLOGUE = "function(locals)"

REQUIRE_PATTERN = re.compile(r"""require.*?\(.*?["'](.*)["'].*?\)""")

_env = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)

GLOBAL_TEMPLATE = _env.from_string(
    "\n{{ namespace }}['{{ name }}'] = {{ function }}\n"
)

AMD_TEMPLATE = _env.from_string(
    "define(["
    "{% for path in dependencies.values() %}'{{ path }}'"
    "{% if not loop.last %},{% endif %}{% endfor %}"
    "], function({{ dependencies.keys() | join(',') }}) { \n"
    "return {{ function }};\n"
    "});\n"
)


class UnknownPrologueError(ValueError):
    """Raised when a compiled function does not start with a known prologue."""


def anonymize_function(source: str) -> str:
    """Rewrite a compiled function's source as ``function(locals){...}``.

    Raises:
        UnknownPrologueError: if the source starts with none of
            ``KNOWN_PROLOGUES``
    """
    for prologue in KNOWN_PROLOGUES:
        if source.startswith(prologue):
            return ANONYMOUS_PROLOGUE + source[len(prologue):]
    raise UnknownPrologueError(
        f"Unexpected compiled function prologue: {source[:40]!r}"
    )


def scan_dependencies(text: str) -> list[str]:
    """Return every module path referenced by a require call, in order."""
    return [match.group(1) for match in REQUIRE_PATTERN.finditer(text)]


def dependency_name(module_path: str) -> str:
    """Short name of a module: the last component of its path."""
    return posixpath.basename(module_path.rstrip("/"))


def collect_dependencies(text: str, declared: Mapping[str, str]) -> dict[str, str]:
    """Merge declared dependencies with those required by ``text``.

    A scanned module replaces a declared one with the same short name and
    keeps its position.
    """
    dependencies = dict(declared)
    for module_path in scan_dependencies(text):
        dependencies[dependency_name(module_path)] = module_path
    return dependencies


def wrap_global(namespace: str, name: str, function: str) -> str:
    """Assign ``function`` to ``namespace['name']``."""
    return GLOBAL_TEMPLATE.render(namespace=namespace, name=name, function=function)


def wrap_amd(dependencies: Mapping[str, str], function: str) -> str:
    """Wrap ``function`` in an AMD module definition."""
    return AMD_TEMPLATE.render(dependencies=dependencies, function=function)
