"""Per-file template compilation.

``compile_one`` picks the backend for the template's source language, drives
it, and wraps the result for the requested target and placement.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from ..compilers import Backends
from ..core.errors import CompilationError
from ..core.models import CompileOptions, Language, Placement, Target
from ..core.options import backend_options, for_file, parse_options, template_name
from .io import read_text
from .wrappers import anonymize_function, collect_dependencies, wrap_amd, wrap_global

logger = logging.getLogger(__name__)


def _compile_haml_js(
    compiler: Any, source: str, name: str, options: CompileOptions
) -> str:
    function = compiler.compile(source)

    if options.target is Target.HTML:
        return function(options.context)

    anonymous = anonymize_function(function.source)

    if options.placement is Placement.AMD:
        dependencies = collect_dependencies(source, options.dependencies)
        logger.debug(f"AMD dependencies for {name}: {list(dependencies)}")
        return wrap_amd(dependencies, anonymous)

    return wrap_global(options.namespace, name, anonymous)


def _compile_haml_coffee(
    compiler: Any, source: str, name: str, options: CompileOptions
) -> str:
    compiler_options = backend_options(options)

    if options.target is Target.JS:
        return compiler.template(source, name, options.namespace, compiler_options)

    function = compiler.compile(source, compiler_options)
    return function(options.context)


_LANGUAGE_COMPILERS = {
    Language.JS: ("haml_js", _compile_haml_js),
    Language.COFFEE: ("haml_coffee", _compile_haml_coffee),
}


def compile_one(
    path: Path,
    options: CompileOptions | Mapping[str, Any] | None = None,
    backends: Backends | None = None,
) -> str:
    """Compile a single template file.

    Args:
        path: Template source file
        options: Compile options, parsed first when given as a mapping
        backends: Compilers to use (default: Node-backed compilers)

    Returns:
        Rendered HTML or JavaScript source

    Raises:
        ConfigurationError: when ``options`` hold an unsupported value
        CompilationError: when reading, compiling or rendering fails
    """
    path = Path(path)
    file_options = for_file(parse_options(options), path)
    backends = backends or Backends.from_settings()
    name = template_name(file_options, path)

    backend_attr, compile_with = _LANGUAGE_COMPILERS[file_options.language]
    compiler = getattr(backends, backend_attr)

    logger.debug(
        f"Compiling {path} as {name!r} "
        f"({file_options.language.value} -> {file_options.target.value})"
    )

    try:
        source = read_text(path)
        return compile_with(compiler, source, name, file_options)
    except Exception as e:
        logger.error(f"{path}: {e}")
        raise CompilationError(f"Haml failed to compile {path}") from e
