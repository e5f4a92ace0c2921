"""
L3 Detection — Portage installed-package database probe.

Read-only. Answers "is it installed?" for the simple atom shapes
straight from ``/var/db/pkg/<category>/<name>-<version>[-r<rev>]``,
which is much cheaper than asking emerge:

    foo               — scan every category, punt when several match
    cat/foo           — any installed version
    cat/foo:slot      — an installed version in that slot

Anything with a comparator, version or use-flags needs emerge.
"""

from __future__ import annotations

import logging
from pathlib import Path

from osdeps.core.errors import ResolutionAmbiguity
from osdeps.core.models.atom import Atom, derive_name

logger = logging.getLogger(__name__)


def probe_installed(atom: Atom, pkg_db: Path) -> bool | None:
    """Check the package database for ``atom``.

    Returns:
        True/False when the database answers, None when the caller has
        to ask the package manager instead.

    Raises:
        ResolutionAmbiguity: A bare name is installed in several categories.
    """
    if atom.comparator or atom.version or atom.useflags or atom.subslot:
        return None
    if not pkg_db.is_dir():
        logger.debug("No package database at %s", pkg_db)
        return None

    if atom.category is None:
        if atom.slot is not None:
            return None
        return _probe_bare(atom, pkg_db)

    entries = _installed_entries(pkg_db, atom.category, atom.package)
    if atom.slot is None:
        return bool(entries)
    return any(_slot_matches(entry, atom.slot) for entry in entries)


def _probe_bare(atom: Atom, pkg_db: Path) -> bool:
    candidates: dict[str, list[str]] = {}
    for category_dir in sorted(pkg_db.iterdir()):
        if not category_dir.is_dir():
            continue
        for entry in _installed_entries(pkg_db, category_dir.name, atom.package):
            candidates.setdefault(category_dir.name, []).append(
                f"{category_dir.name}/{entry.name}"
            )

    if not candidates:
        return False
    if len(candidates) == 1:
        return True
    raise ResolutionAmbiguity(
        atom.raw, [entry for entries in candidates.values() for entry in entries],
    )


def _installed_entries(pkg_db: Path, category: str, package: str) -> list[Path]:
    category_dir = pkg_db / category
    if not category_dir.is_dir():
        return []
    wanted = f"{category}/{package}"
    return [
        entry
        for entry in sorted(category_dir.glob(f"{package}-*"))
        if entry.is_dir() and derive_name(f"{category}/{entry.name}") == wanted
    ]


def _slot_matches(entry: Path, slot: str) -> bool:
    try:
        installed_slot = (entry / "SLOT").read_text(encoding="utf-8").strip()
    except OSError as e:
        logger.debug("Cannot read SLOT of %s: %s", entry, e)
        return False
    return (
        installed_slot == slot
        or installed_slot.startswith(f"{slot}/")
        or installed_slot.startswith(f"{slot} ")
    )
