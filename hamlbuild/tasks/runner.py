"""Build driver: source discovery, per-destination batching and writes."""

from __future__ import annotations

import glob
import logging
import os
import re
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..compilers import Backends
from ..core.errors import ConfigurationError
from ..core.models import BuildConfig, BuildTarget, CompileOptions, FileMapping
from ..core.options import describe, merge_options, parse_options
from ..rendering.dispatch import compile_one
from ..rendering.io import atomic_write_text

logger = logging.getLogger(__name__)

_GLOB_MAGIC = re.compile(r"[*?[]")


def _resolve(path: Path, root: Path) -> Path:
    return path if path.is_absolute() else root / path


def _glob_pattern(pattern: str, root: Path) -> str:
    # Only the pattern itself may contain wildcards; the root is literal.
    if Path(pattern).is_absolute():
        return pattern
    return os.path.join(glob.escape(str(root)), pattern)


def expand_sources(patterns: Iterable[str], root: Path) -> list[Path]:
    """Expand source patterns into existing files.

    Glob patterns contribute their sorted matches. Literal paths that do not
    exist are reported and dropped.

    Args:
        patterns: Source paths or glob patterns
        root: Base directory for relative patterns

    Returns:
        Existing source files in declaration order, without duplicates
    """
    found: list[Path] = []
    seen: set[Path] = set()

    for pattern in patterns:
        if _GLOB_MAGIC.search(pattern):
            matches = sorted(
                glob.glob(_glob_pattern(pattern, root), recursive=True)
            )
            candidates = [Path(match) for match in matches if Path(match).is_file()]
        else:
            candidate = _resolve(Path(pattern), root)
            if not candidate.is_file():
                logger.warning(f'Source file "{candidate}" not found.')
                continue
            candidates = [candidate]

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)

    return found


def compile_destination(
    mapping: FileMapping,
    options: CompileOptions,
    *,
    root: Path,
    backends: Backends | None = None,
    file_mode: int = 0o644,
) -> Path | None:
    """Compile every source of a mapping and write the destination once.

    Returns:
        The written path, or None when no source file was found
    """
    sources = expand_sources(mapping.src, root)
    if not sources:
        logger.info("Unable to compile; no valid files were found.")
        return None

    backends = backends or Backends.from_settings()
    output = "\n".join(compile_one(source, options, backends) for source in sources)

    dest = _resolve(mapping.dest, root)
    atomic_write_text(dest, output, mode=file_mode)
    logger.info(f"File {dest} created.")
    return dest


def run_target(
    name: str,
    target: BuildTarget,
    task_options: Mapping[str, Any] | None = None,
    *,
    root: Path,
    backends: Backends | None = None,
    file_mode: int = 0o644,
) -> list[Path]:
    """Run one build target.

    Target options override task options. Options are validated before any
    source is compiled.
    """
    options = parse_options(merge_options(task_options, target.options))
    logger.debug(f"Target {name} options: {describe(options)}")

    written: list[Path] = []
    for mapping in target.files:
        dest = compile_destination(
            mapping, options, root=root, backends=backends, file_mode=file_mode
        )
        if dest is not None:
            written.append(dest)
    return written


def run_build(
    config: BuildConfig,
    names: Iterable[str] | None = None,
    *,
    root: Path,
    backends: Backends | None = None,
    file_mode: int = 0o644,
) -> list[Path]:
    """Run the named targets, or every target in file order."""
    selected = list(names) if names else list(config.targets)

    unknown = [name for name in selected if name not in config.targets]
    if unknown:
        raise ConfigurationError(
            f"Unknown target(s): {', '.join(unknown)}; "
            f"available: {', '.join(config.targets)}"
        )

    backends = backends or Backends.from_settings()
    logger.info(f"Running {len(selected)} target(s)")

    written: list[Path] = []
    for name in selected:
        logger.info(f"Running haml:{name}")
        written.extend(
            run_target(
                name,
                config.targets[name],
                config.options,
                root=root,
                backends=backends,
                file_mode=file_mode,
            )
        )

    logger.info(f"Successfully wrote {len(written)} file(s)")
    return written
