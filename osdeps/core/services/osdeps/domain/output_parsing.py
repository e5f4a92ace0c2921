"""
L1 Domain — Dry-run output line parsing (pure).

A line is accepted in three steps, each of which can reject it:

    1. split   — the table's ``line`` regex yields an action token and
                 an identifier token
    2. verify  — the identifier must look like a package (``ident``)
    3. classify — the first rule matching the action gives the state,
                 else the table default

Everything family-specific lives in the table; the steps do not change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from osdeps.core.models.atom import derive_name
from osdeps.core.models.state import InstallState


@dataclass(frozen=True)
class OutputTable:
    """Compiled form of one ``data.output_tables`` entry."""

    family: str
    query: tuple[str, ...]
    line: re.Pattern[str]
    ident: re.Pattern[str]
    rules: tuple[tuple[re.Pattern[str], InstallState], ...]
    default: InstallState
    ambiguous: re.Pattern[str] | None = None
    candidate: re.Pattern[str] | None = None

    @classmethod
    def from_data(cls, family: str, data: dict) -> OutputTable:
        return cls(
            family=family,
            query=tuple(data["query"]),
            line=re.compile(data["line"]),
            ident=re.compile(data["ident"]),
            rules=tuple(
                (re.compile(pattern), InstallState(installed=inst, up_to_date=cur))
                for pattern, (inst, cur) in data["rules"]
            ),
            default=InstallState(
                installed=data["default"][0], up_to_date=data["default"][1],
            ),
            ambiguous=_compile_optional(data.get("ambiguous")),
            candidate=_compile_optional(data.get("candidate"), re.MULTILINE),
        )


@dataclass(frozen=True)
class OutputLine:
    """A recognised dry-run line."""

    action: str
    identifier: str
    state: InstallState

    @property
    def name(self) -> str:
        return derive_name(self.identifier)


def parse_line(table: OutputTable, line: str) -> OutputLine | None:
    m = table.line.match(line.strip())
    if not m:
        return None
    action, identifier = m.group("action"), m.group("ident")

    if not table.ident.match(identifier):
        return None

    for pattern, state in table.rules:
        if pattern.search(action):
            return OutputLine(action=action, identifier=identifier, state=state)
    return OutputLine(action=action, identifier=identifier, state=table.default)


def parse_output(table: OutputTable, output: str) -> list[OutputLine]:
    """All recognised lines, in output order."""
    parsed = []
    for raw_line in output.splitlines():
        line = parse_line(table, raw_line)
        if line is not None:
            parsed.append(line)
    return parsed


def parse_ambiguity(table: OutputTable, output: str) -> list[str] | None:
    """Candidates listed by an "ambiguous name" refusal, or None."""
    if table.ambiguous is None or not table.ambiguous.search(output):
        return None
    if table.candidate is None:
        return []
    return [m.group("ident") for m in table.candidate.finditer(output)]


def _compile_optional(pattern: str | None, flags: int = 0) -> re.Pattern[str] | None:
    return re.compile(pattern, flags) if pattern else None
