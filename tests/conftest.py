"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from osdeps.core.config.loader import WorkspaceConfig
from osdeps.core.services.osdeps.data.output_tables import EMERGE_OUTPUT

EMERGE_QUERY: tuple[str, ...] = tuple(EMERGE_OUTPUT["query"])


def ok(stdout: str = "", returncode: int = 0, stderr: str = "") -> dict[str, Any]:
    """A runner result in the shape ``execute`` returns."""
    result: dict[str, Any] = {
        "ok": returncode == 0,
        "returncode": returncode,
        "stdout": stdout,
        "stderr": stderr,
        "elapsed_ms": 1,
    }
    if returncode != 0:
        result["error"] = f"Command failed (exit {returncode})"
    return result


class FakeRunner:
    """Stands in for ``privileged_runner.execute``.

    Responses are keyed by the full argv; anything unscripted succeeds
    with empty output. Every call is recorded.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self._responses: dict[tuple[str, ...], dict[str, Any]] = {}

    def respond(self, argv: tuple[str, ...] | list[str], **result: Any) -> None:
        self._responses[tuple(argv)] = ok(**result)

    def respond_query(self, atoms: list[str], stdout: str = "", returncode: int = 0, stderr: str = "") -> None:
        self.respond((*EMERGE_QUERY, *atoms), stdout=stdout, returncode=returncode, stderr=stderr)

    def __call__(self, cmd: list[str], **kwargs: Any) -> dict[str, Any]:
        self.calls.append((list(cmd), kwargs))
        return dict(self._responses.get(tuple(cmd), ok()))

    @property
    def queries(self) -> list[list[str]]:
        """Atoms of every dry-run query, in call order."""
        n = len(EMERGE_QUERY)
        return [cmd[n:] for cmd, _ in self.calls if tuple(cmd[:n]) == EMERGE_QUERY]

    @property
    def installs(self) -> list[tuple[list[str], dict[str, Any]]]:
        n = len(EMERGE_QUERY)
        return [(cmd, kw) for cmd, kw in self.calls if tuple(cmd[:n]) != EMERGE_QUERY]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config(tmp_path: Path) -> WorkspaceConfig:
    """A fresh workspace config that auto-installs with every manager."""
    return WorkspaceConfig(path=tmp_path / "osdeps.yml")


@pytest.fixture
def pkg_db(tmp_path: Path) -> Path:
    """A fake portage installed-package database.

    sys-apps/foo-1.2-r1   SLOT 0
    dev-libs/bar-2.0      SLOT 2/2.1
    app-misc/dup-1.0      (also installed as dev-util/dup-2.0)
    sys-apps/foobar-3.0
    """
    db = tmp_path / "var-db-pkg"
    for entry, slot in (
        ("sys-apps/foo-1.2-r1", "0"),
        ("dev-libs/bar-2.0", "2/2.1"),
        ("app-misc/dup-1.0", "0"),
        ("dev-util/dup-2.0", "0"),
        ("sys-apps/foobar-3.0", "0"),
    ):
        path = db / entry
        path.mkdir(parents=True)
        (path / "SLOT").write_text(f"{slot}\n")
    return db


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
