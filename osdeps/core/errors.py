"""
Error taxonomy — shared by every layer.

Only ``ConfigurationError`` is allowed to escape a manager. The other
errors are raised at the point of failure and turned into diagnostics
(or a ``False`` return) by the manager that called.
"""

from __future__ import annotations


class OsdepsError(Exception):
    """Base class for all osdeps errors."""


class ConfigurationError(OsdepsError):
    """Configuration is missing or unusable (e.g. no install template)."""


class ResolutionAmbiguity(OsdepsError):
    """A bare name matched packages in more than one category."""

    def __init__(self, atom: str, candidates: list[str]):
        self.atom = atom
        self.candidates = sorted(candidates)
        super().__init__(
            f"Ambiguous package name {atom}, candidates: {', '.join(self.candidates)}"
        )


class QueryFailure(OsdepsError):
    """A dry-run query exited non-zero or produced nothing we understand."""

    def __init__(self, atoms: list[str], returncode: int | None = None):
        self.atoms = list(atoms)
        self.returncode = returncode
        quoted = " ".join(f"'{a}'" for a in self.atoms)
        super().__init__(f"There is a problem resolving os packages {quoted}")


class InstallFailure(OsdepsError):
    """The install command exited non-zero."""

    def __init__(self, packages: list[str], returncode: int, error: str = ""):
        self.packages = list(packages)
        self.returncode = returncode
        self.error = error
        super().__init__(
            f"Failed to install {', '.join(sorted(self.packages))} "
            f"(exit {returncode}){': ' + error if error else ''}"
        )
