"""
Section segmentation for generated resume text.

Splits the raw line stream into named buckets using the structural markers:

    SECTION: EXPERIENCE
    Title: Data Engineer
    - Built pipelines
    END_SECTION

Lines outside any section and lines inside unrecognized sections are
discarded and reported as diagnostics. A section name used more than once
accumulates its lines across occurrences, in encounter order.

A begin marker seen while a section is still open (no END_SECTION) closes the
open section and starts the new one. This covers generators that forget the
end marker; the lines seen so far are kept, never replaced.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from resume_structurer.contexts.intake.resume_record import ParseDiagnostic
from resume_structurer.contexts.intake.section_patterns import (
    RECOGNIZED_SECTIONS,
    is_end_marker,
    match_begin_marker,
)


@dataclass
class SegmentedDocument:
    """
    Section buckets extracted from one document.

    Attributes:
        sections: Section name -> ordered lines (only sections that were opened)
        line_numbers: Section name -> 1-based source line number of each bucket line
        diagnostics: Lines that were discarded or markers that were repaired
    """

    sections: dict[str, list[str]] = field(default_factory=dict)
    line_numbers: dict[str, list[int]] = field(default_factory=dict)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)

    def lines(self, section: str) -> list[str]:
        return self.sections.get(section, [])

    def numbered_lines(self, section: str) -> list[tuple[int, str]]:
        return list(zip(self.line_numbers.get(section, []), self.sections.get(section, [])))


class _SegmenterState:
    """Tracks OUTSIDE / INSIDE(name) while walking the lines."""

    def __init__(self, document: SegmentedDocument):
        self.document = document
        self.inside: bool = False
        # None while inside an unrecognized section
        self.section: Optional[str] = None
        self.opened_at: Optional[int] = None
        self.buffer: list[tuple[int, str]] = []

    def open(self, section: Optional[str], line_number: int) -> None:
        self.inside = True
        self.section = section
        self.opened_at = line_number
        self.buffer = []
        if section is not None:
            # An opened section exists even if it stays empty
            self.document.sections.setdefault(section, [])
            self.document.line_numbers.setdefault(section, [])

    def flush(self) -> None:
        if self.section is not None:
            self.document.sections[self.section].extend(line for _, line in self.buffer)
            self.document.line_numbers[self.section].extend(number for number, _ in self.buffer)
        self.buffer = []

    def close(self) -> None:
        self.flush()
        self.inside = False
        self.section = None
        self.opened_at = None


def segment_sections(lines: Iterable[str]) -> SegmentedDocument:
    """
    Split lines into section buckets.

    Args:
        lines: Ordered document lines (see normalizer.preprocess_resume_text)

    Returns:
        SegmentedDocument with buckets and diagnostics
    """
    document = SegmentedDocument()
    state = _SegmenterState(document)

    def report(line_number: int, line: str, reason: str, section: Optional[str] = None) -> None:
        document.diagnostics.append(
            ParseDiagnostic(line_number=line_number, line=line, reason=reason, section=section)
        )

    for line_number, line in enumerate(lines, start=1):
        begin_name = match_begin_marker(line)

        if begin_name is not None:
            if state.inside:
                if state.section is not None:
                    report(line_number, line, "section reopened before END_SECTION", state.section)
                state.close()

            if begin_name in RECOGNIZED_SECTIONS:
                state.open(begin_name, line_number)
            else:
                report(line_number, line, f"unrecognized section '{begin_name}'")
                state.open(None, line_number)
            continue

        if is_end_marker(line):
            if state.inside:
                state.close()
            else:
                report(line_number, line, "END_SECTION without an open section")
            continue

        if not state.inside:
            if line.strip():
                report(line_number, line, "line outside any section")
        elif state.section is None:
            if line.strip():
                report(line_number, line, "line inside unrecognized section")
        else:
            state.buffer.append((line_number, line))

    if state.inside:
        if state.section is not None:
            report(
                state.opened_at,
                f"SECTION: {state.section}",
                "section not closed before end of input",
                state.section,
            )
        state.close()

    return document
