"""
Atom — a parsed package specifier.

Grammar (portage flavour, the richest one we have to understand)::

    [comparator][category/]name[-version[-r<rev>]][:slot[/subslot]][[useflags]]

The bare ``name`` (category kept, decorations stripped) is the only
thing used to match manager output back to the requested atoms.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

# Longest first: "<=" must win over "<".
COMPARATORS: tuple[str, ...] = ("<=", ">=", "=", "<", ">", "~")

_USEFLAGS_RE = re.compile(r"\[([^\]]*)\]$")
_SLOT_RE = re.compile(r":([^:/\[\]]*)(?:/([^:\[\]]*))?$")
_REPO_RE = re.compile(r"::[^:]+$")
_REVISION_RE = re.compile(r"-r(\d+)$")
# Versions always start with a digit; package names may not end in one.
_VERSION_RE = re.compile(r"-(\d[^-]*?)\*?$")


class Atom(BaseModel):
    """Immutable package specifier.

    Two atoms with different ``raw`` strings are different cache keys,
    even when ``same_package`` says they name the same package.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    name: str
    comparator: str | None = None
    version: str | None = None
    revision: str | None = None
    slot: str | None = None
    subslot: str | None = None
    useflags: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def parse(cls, raw: str) -> Atom:
        """Parse a raw specifier into its components.

        Decorations are peeled from the outside in: comparator,
        use-flag bracket, slot, revision, version.
        """
        spec = raw.strip()
        if not spec:
            raise ValueError("Empty package specifier")

        comparator = None
        for op in COMPARATORS:
            if spec.startswith(op):
                comparator = op
                spec = spec[len(op):]
                break

        useflags: frozenset[str] = frozenset()
        m = _USEFLAGS_RE.search(spec)
        if m:
            useflags = frozenset(
                flag.strip() for flag in m.group(1).split(",") if flag.strip()
            )
            spec = spec[: m.start()]

        spec = _REPO_RE.sub("", spec)

        slot = subslot = None
        m = _SLOT_RE.search(spec)
        if m:
            slot, subslot = m.group(1), m.group(2)
            spec = spec[: m.start()]

        name, version, revision = _split_version(spec)
        return cls(
            raw=raw,
            name=name,
            comparator=comparator,
            version=version,
            revision=revision,
            slot=slot,
            subslot=subslot,
            useflags=useflags,
        )

    @property
    def category(self) -> str | None:
        if "/" in self.name:
            return self.name.split("/", 1)[0]
        return None

    @property
    def package(self) -> str:
        """Name without the category prefix."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def is_bare(self) -> bool:
        """True when the specifier carries no decoration at all."""
        return self.raw.strip() == self.name

    def same_package(self, other: Atom | str) -> bool:
        """Name-equivalence: the only equality used for output matching."""
        other_name = other.name if isinstance(other, Atom) else derive_name(other)
        return self.name == other_name

    def __str__(self) -> str:
        return self.raw


def _split_version(spec: str) -> tuple[str, str | None, str | None]:
    revision = None
    m = _REVISION_RE.search(spec)
    if m and _VERSION_RE.search(spec[: m.start()]):
        revision = m.group(1)
        spec = spec[: m.start()]

    version = None
    m = _VERSION_RE.search(spec)
    # "-1.0" alone is not a package; keep it as a name.
    if m and m.start() > 0 and not spec[: m.start()].endswith("/"):
        version = m.group(1)
        spec = spec[: m.start()]
    elif revision is not None:
        spec = f"{spec}-r{revision}"
        revision = None

    return spec, version, revision


def derive_name(identifier: str) -> str:
    """Derived package name of a raw specifier or a manager output token.

    ``sys-apps/foo-1.2-r1::gentoo`` → ``sys-apps/foo``
    """
    return Atom.parse(identifier).name
