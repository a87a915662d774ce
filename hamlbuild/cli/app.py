"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from typing_extensions import Annotated

from ..compilers import Backends
from ..core.config import load_build_config
from ..core.errors import HamlBuildError
from ..core.models import FileMapping
from ..core.options import describe, parse_options
from ..core.settings import get_settings
from ..tasks import runner
from .parsers import (
    load_context_file,
    parse_context,
    parse_dependency,
    parse_file_mode,
    parse_option,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hamlbuild",
    help="Compile HAML templates to HTML or JavaScript with haml-js or haml-coffee.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


@app.command()
def run(
    targets: Annotated[
        Optional[list[str]],
        typer.Argument(help="Targets to run (default: all, in file order)."),
    ] = None,
    config_path: Annotated[
        str,
        typer.Option(
            "--config",
            "-c",
            help="Build file (default: $HAMLBUILD_CONFIG_PATH or hamlbuild.yaml).",
            metavar="FILE",
        ),
    ] = "",
    root: Annotated[
        str,
        typer.Option(
            "--root",
            help="Base directory for sources and destinations (default: build file directory).",
            metavar="DIR",
        ),
    ] = "",
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Run build targets from a build file."""
    _configure_logging(verbose)

    mode = parse_file_mode(file_mode)
    build_file = Path(config_path) if config_path else get_settings().config_path

    try:
        config = load_build_config(build_file)
        base = Path(root) if root else build_file.resolve().parent
        runner.run_build(
            config,
            targets,
            root=base,
            backends=Backends.from_settings(get_settings()),
            file_mode=mode,
        )
    except HamlBuildError as e:
        logger.error(f"Aborted: {e}")
        raise typer.Exit(code=1) from e


@app.command("compile")
def compile_command(
    sources: Annotated[
        list[str],
        typer.Argument(help="Template files or glob patterns."),
    ],
    dest: Annotated[
        str,
        typer.Option(
            "--dest",
            "-o",
            help="Destination file for the compiled output.",
            metavar="FILE",
        ),
    ],
    language: Annotated[
        Optional[str],
        typer.Option("--language", help="Source language: js or coffee (default: js)."),
    ] = None,
    target: Annotated[
        Optional[str],
        typer.Option("--target", help="Output target: html or js (default: html)."),
    ] = None,
    placement: Annotated[
        Optional[str],
        typer.Option(
            "--placement", help="JavaScript wrapping: global or amd (default: global)."
        ),
    ] = None,
    namespace: Annotated[
        Optional[str],
        typer.Option("--namespace", help="Global namespace (default: window.HAML)."),
    ] = None,
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="Template name (default: file name without extension)."),
    ] = None,
    dependencies: Annotated[
        list[str],
        typer.Option(
            "--dependency",
            help="AMD dependency (format: NAME=PATH). Repeatable.",
            metavar="NAME=PATH",
        ),
    ] = [],
    context: Annotated[
        Optional[str],
        typer.Option("--context", help="Rendering context as JSON.", metavar="JSON"),
    ] = None,
    context_file: Annotated[
        Optional[Path],
        typer.Option(
            "--context-file", help="Rendering context from a JSON or YAML file."
        ),
    ] = None,
    extra_options: Annotated[
        list[str],
        typer.Option(
            "--option",
            help="Pass-through compiler option (format: KEY=VALUE, VALUE as JSON or text). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = [],
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Compile templates into a single destination file."""
    _configure_logging(verbose)

    if context is not None and context_file is not None:
        raise typer.BadParameter("Use either --context or --context-file, not both")

    raw: dict[str, Any] = dict(map(parse_option, extra_options))
    for key, value in (
        ("language", language),
        ("target", target),
        ("placement", placement),
        ("namespace", namespace),
        ("name", name),
    ):
        if value is not None:
            raw[key] = value
    if dependencies:
        raw["dependencies"] = dict(map(parse_dependency, dependencies))
    if context is not None:
        raw["context"] = parse_context(context)
    elif context_file is not None:
        raw["context"] = load_context_file(context_file)

    mode = parse_file_mode(file_mode)

    try:
        options = parse_options(raw)
        logger.debug(f"Options: {describe(options)}")
        runner.compile_destination(
            FileMapping(src=sources, dest=Path(dest)),
            options,
            root=Path.cwd(),
            backends=Backends.from_settings(get_settings()),
            file_mode=mode,
        )
    except HamlBuildError as e:
        logger.error(f"Aborted: {e}")
        raise typer.Exit(code=1) from e


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
