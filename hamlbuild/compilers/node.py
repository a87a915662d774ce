"""Node.js bridge used to drive the JavaScript template compilers."""

from __future__ import annotations

import json
import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Any

from ..core.settings import Settings, get_settings

logger = logging.getLogger(__name__)

BRIDGE_SCRIPT = Path(__file__).with_name("bridge.js")


class NodeBridgeError(RuntimeError):
    """Raised when the Node.js bridge cannot complete a request."""


def _bridge_env(settings: Settings) -> dict[str, str]:
    env = dict(os.environ)
    search = [str(settings.node_path.resolve())]
    if env.get("NODE_PATH"):
        search.append(env["NODE_PATH"])
    env["NODE_PATH"] = os.pathsep.join(search)
    return env


def run_bridge(op: str, *, settings: Settings | None = None, **payload: Any) -> Any:
    """Run one bridge operation and return its result.

    Payload entries that are ``None`` are omitted, so they arrive in
    JavaScript as ``undefined``.

    Args:
        op: Bridge operation name (e.g. ``haml-js.compile``)
        settings: Runtime settings; defaults to the cached settings
        **payload: Request fields

    Returns:
        The ``result`` member of the bridge response

    Raises:
        NodeBridgeError: when node is missing, the request cannot be
            encoded, or the bridge reports a failure
    """
    settings = settings or get_settings()
    node = shutil.which(settings.node_binary)
    if node is None:
        raise NodeBridgeError(f"missing dependency: {settings.node_binary}")

    request = {"op": op, **{k: v for k, v in payload.items() if v is not None}}
    try:
        encoded = json.dumps(request)
    except (TypeError, ValueError) as e:
        raise NodeBridgeError(f"{op}: request is not JSON serializable: {e}") from e

    logger.debug(f"Node bridge request: {op}")
    result = subprocess.run(
        [node, str(BRIDGE_SCRIPT)],
        input=encoded,
        capture_output=True,
        text=True,
        env=_bridge_env(settings),
    )

    try:
        response = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        detail = result.stderr.strip() or result.stdout.strip() or "no output"
        raise NodeBridgeError(
            f"{op} failed (exit {result.returncode}): {detail}"
        ) from e

    if not isinstance(response, dict) or not response.get("ok"):
        error = response.get("error") if isinstance(response, dict) else response
        raise NodeBridgeError(f"{op} failed: {error}")
    if result.returncode != 0:
        raise NodeBridgeError(f"{op} failed (exit {result.returncode})")

    return response.get("result")


def run_bridge_text(op: str, *, settings: Settings | None = None, **payload: Any) -> str:
    """Run a bridge operation whose result must be a string."""
    value = run_bridge(op, settings=settings, **payload)
    if not isinstance(value, str):
        raise NodeBridgeError(
            f"{op} returned {type(value).__name__}, expected a string"
        )
    return value
