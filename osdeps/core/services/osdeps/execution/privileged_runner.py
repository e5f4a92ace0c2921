"""
L4 Execution — Privileged command runner.

The SINGLE PLACE where ``subprocess.run`` is called for package
queries and installs. Locking, elevation and environment isolation
are centralised here.

Security invariants:
- An elevated command never sees the caller's environment. It gets a
  fresh one: a fixed PATH plus the explicitly inherited variables.
- The elevation helper is looked up in that fixed PATH only.
- Output is returned as-is; deciding what it means is the caller's job.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Iterable, Mapping
from typing import Any

from osdeps.core.services.osdeps.data.constants import (
    ELEVATION_HELPER,
    ELEVATION_PRESERVE_ENV,
    OUTPUT_TAIL_CHARS,
    PRIVILEGED_PATH,
)
from osdeps.core.services.osdeps.execution.install_lock import InstallLock

logger = logging.getLogger(__name__)


def build_root_env(
    env: Mapping[str, str],
    inherit: Iterable[str] = (),
) -> dict[str, str]:
    """Isolated environment for an elevated command.

    Starts empty, sets ``PATH`` to the privileged search path and copies
    only the ``inherit`` variables that are actually set in ``env``.
    """
    isolated = {"PATH": PRIVILEGED_PATH}
    for name in sorted(set(inherit)):
        if name in env:
            isolated[name] = env[name]
    return isolated


def elevate(cmd: list[str], root_env: Mapping[str, str]) -> list[str] | None:
    """Prefix ``cmd`` with the elevation helper, keeping ``root_env``.

    Returns the command unchanged when we already are root, and None
    when the helper cannot be found.
    """
    if os.geteuid() == 0:
        return list(cmd)
    helper = shutil.which(ELEVATION_HELPER, path=root_env.get("PATH", PRIVILEGED_PATH))
    if helper is None:
        return None
    return [helper, ELEVATION_PRESERVE_ENV, *cmd]


def execute(
    cmd: list[str],
    *,
    needs_locking: bool = False,
    needs_root: bool = False,
    env: Mapping[str, str] | None = None,
    inherit: Iterable[str] = (),
    lock: InstallLock | None = None,
    cwd: str | None = None,
    capture: bool = True,
) -> dict[str, Any]:
    """Run ``cmd``, optionally serialized and/or elevated.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_locking: Hold the machine-wide install lock while running.
        needs_root: Run through the elevation helper in an isolated env.
        env: Base environment (default: the current process environment).
        inherit: Variable names copied from ``env`` into the root env.
        lock: Lock to use instead of the default machine-wide one.
        cwd: Working directory for the command.
        capture: Capture output. When False the command writes straight
            to our terminal and ``stdout``/``stderr`` come back empty.

    Returns:
        ``{"ok": bool, "returncode": N, "stdout": "...", "stderr": "...",
        "elapsed_ms": N}``, plus ``"error"`` when ``ok`` is False.
    """
    if needs_locking:
        guard = lock or InstallLock()
        try:
            guard.acquire()
        except OSError as e:
            logger.warning("Cannot take the install lock %s: %s", guard.path, e)
            return _failure(126, f"Cannot take the install lock: {e}")
        try:
            return execute(
                cmd, needs_locking=False, needs_root=needs_root,
                env=env, inherit=inherit, cwd=cwd, capture=capture,
            )
        finally:
            guard.release()

    base_env = dict(os.environ if env is None else env)

    if needs_root:
        process_env = build_root_env(base_env, inherit)
        elevated = elevate(cmd, process_env)
        if elevated is None:
            return _failure(
                127,
                f"'{ELEVATION_HELPER}' not found in {process_env['PATH']}; "
                "cannot run the command as root",
            )
        cmd = elevated
    else:
        process_env = base_env

    return _run_subprocess(cmd, env=process_env, cwd=cwd, capture=capture)


def _failure(returncode: int, error: str, elapsed_ms: int = 0) -> dict[str, Any]:
    return {
        "ok": False,
        "returncode": returncode,
        "stdout": "",
        "stderr": "",
        "elapsed_ms": elapsed_ms,
        "error": error,
    }


def _run_subprocess(
    cmd: list[str],
    *,
    env: Mapping[str, str],
    cwd: str | None = None,
    capture: bool = True,
) -> dict[str, Any]:
    logger.debug("Executing: %s", cmd)
    start = time.monotonic()
    try:
        # Undecodable bytes become U+FFFD.
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=dict(env),
            cwd=cwd,
        )
    except FileNotFoundError:
        return _failure(
            127, f"Command not found: {cmd[0]}",
            int((time.monotonic() - start) * 1000),
        )
    except OSError as e:
        logger.warning("Cannot execute %s: %s", cmd[0], e)
        return _failure(126, str(e), int((time.monotonic() - start) * 1000))
    except Exception as e:
        logger.exception("Subprocess error: %s", cmd)
        return _failure(1, str(e), int((time.monotonic() - start) * 1000))

    elapsed_ms = int((time.monotonic() - start) * 1000)
    outcome: dict[str, Any] = {
        "ok": result.returncode == 0,
        "returncode": result.returncode,
        "stdout": result.stdout[-OUTPUT_TAIL_CHARS:] if result.stdout else "",
        "stderr": result.stderr[-OUTPUT_TAIL_CHARS:] if result.stderr else "",
        "elapsed_ms": elapsed_ms,
    }
    if result.returncode != 0:
        outcome["error"] = f"Command failed (exit {result.returncode})"
    return outcome
