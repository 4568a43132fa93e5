"""
Multi-entry block parsing for jobs, degrees, projects and achievements.

A multi-entry section is a flat run of lines; an entry starts whenever a
marker label (e.g. "Title" for EXPERIENCE, "Degree" for EDUCATION) appears
after the current entry already holds something:

    Title: Data Engineer        <- opens entry 1
    Company: Acme
    - Built pipelines
    Title: Analyst              <- closes entry 1, opens entry 2
    Details:
    - Wrote reports

The parser is an explicit two-state machine. AWAITING_ENTRY means the
current entry is still empty; IN_ENTRY means it holds at least one field
or an opened details list. A marker label only closes an entry in IN_ENTRY,
so a leading marker never produces an empty entry.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from resume_structurer.contexts.intake.defaults import DEFAULT_BULLET_PREFIX
from resume_structurer.contexts.intake.resume_record import Entry, ParseDiagnostic
from resume_structurer.contexts.intake.section_patterns import (
    LinePatterns,
    extract_label,
    match_key_value,
    normalize_key,
)

AWAITING_ENTRY = "awaiting_entry"
IN_ENTRY = "in_entry"


@dataclass
class _EntryBuilder:
    """Mutable accumulator for the entry being read."""

    fields: dict[str, str] = field(default_factory=dict)
    details: Optional[list[str]] = None

    @property
    def state(self) -> str:
        if self.fields or self.details is not None:
            return IN_ENTRY
        return AWAITING_ENTRY

    def open_details(self) -> list[str]:
        if self.details is None:
            self.details = []
        return self.details

    def build(self) -> Entry:
        return Entry(fields=self.fields, details=self.details)


@dataclass
class EntryBlock:
    """Parsed entries plus the lines that did not contribute to them."""

    entries: list[Entry] = field(default_factory=list)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)


def parse_entry_lines(
    lines: Sequence[str],
    markers: Iterable[str],
    bullet_prefix: str = DEFAULT_BULLET_PREFIX,
    section: Optional[str] = None,
    line_numbers: Optional[Sequence[int]] = None,
) -> EntryBlock:
    """
    Split a section's lines into ordered entries.

    Args:
        lines: Section lines in source order
        markers: Labels that start a new entry (case-insensitive, e.g. {"title"})
        bullet_prefix: Prefix of detail lines
        section: Section name, for diagnostics only
        line_numbers: Source line number of each line, for diagnostics only

    Returns:
        EntryBlock with entries in encounter order and diagnostics

    Raises:
        ValueError: If markers is empty
    """
    marker_keys = frozenset(normalize_key(marker) for marker in markers)
    if not marker_keys:
        raise ValueError("At least one entry marker is required")

    block = EntryBlock()
    current = _EntryBuilder()

    def report(index: int, line: str, reason: str) -> None:
        block.diagnostics.append(
            ParseDiagnostic(
                line_number=line_numbers[index] if line_numbers else None,
                line=line,
                reason=reason,
                section=section,
            )
        )

    for index, line in enumerate(lines):
        stripped = line.strip()
        if not stripped:
            continue

        if extract_label(stripped) in marker_keys and current.state == IN_ENTRY:
            block.entries.append(current.build())
            current = _EntryBuilder()

        # Only leading whitespace is stripped here: "- " is an empty bullet
        unindented = line.lstrip()
        if unindented.startswith(bullet_prefix):
            current.open_details().append(unindented[len(bullet_prefix) :].strip())
            continue

        if stripped.lower() == LinePatterns.DETAILS_HEADER:
            current.open_details()
            continue

        pair = match_key_value(stripped)
        if pair is None:
            report(index, line, "not a field, detail, or marker line")
            continue

        key, value = pair
        if key in current.fields:
            report(index, line, f"duplicate field '{key}' overwrites earlier value")
        current.fields[key] = value

    if current.state == IN_ENTRY:
        block.entries.append(current.build())

    return block
