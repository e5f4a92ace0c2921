"""
L0 Data — Dry-run output tables, one per resolver-backed manager family.

Each table says how to query the manager without side effects and how
to read one line of its answer:

    query   — argv prefix of the dry-run invocation (atoms appended)
    line    — regex splitting a line into ``action`` and ``ident`` tokens
    ident   — regex the identifier token must match to be trusted
    rules   — ordered (action regex, (installed, up_to_date)); first match wins
    default — state for a recognised action no rule names
    ambiguous, candidate — optional; recognise a "which one did you mean"
                refusal and the candidate identifiers it lists

Pure data. No logic.
"""

from __future__ import annotations

# emerge -p1 --nodeps --quiet --color n <atoms>
#
#   [ebuild   R   ] sys-apps/foo-1.2-r1     would rebuild, same version
#   [ebuild  N    ] sys-apps/bar-2.0        would be newly installed
#   [ebuild     U ] sys-apps/baz-3.1        newer version available
#   [ebuild     UD] sys-apps/baz-3.0        downgrade requested
#
# Exit status is non-zero when an atom is ambiguous or unknown.
EMERGE_OUTPUT: dict = {
    "query": ["emerge", "-p1", "--nodeps", "--quiet", "--color", "n"],
    "line": r"^\[(?P<action>(?:ebuild|binary)[^\]]*)\]\s+(?P<ident>\S+)",
    "ident": r"^[A-Za-z0-9_][A-Za-z0-9+_.-]*/[A-Za-z0-9_][A-Za-z0-9+_.-]*",
    "rules": [
        (r"R", (True, True)),
        (r"N", (False, False)),
    ],
    "default": (True, False),
    # emerge refuses bare names that exist in several categories:
    #   !!! The short ebuild name "foo" is ambiguous. Please specify
    #   !!! one of the following fully-qualified ebuild names instead:
    #
    #       dev-libs/foo
    #       app-misc/foo
    "ambiguous": r"The short ebuild name \"(?P<name>[^\"]+)\" is ambiguous",
    "candidate": r"^\s+(?P<ident>[A-Za-z0-9_][A-Za-z0-9+_.-]*/[A-Za-z0-9_][A-Za-z0-9+_.-]*)\s*$",
}

OUTPUT_TABLES: dict[str, dict] = {
    "emerge": EMERGE_OUTPUT,
}
