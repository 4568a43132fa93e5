"""
Key-value block parsing.

Turns "Label: value" lines into a mapping keyed by the normalized label:

    Name: Jane Doe          -> {"name": "Jane Doe"}
    LinkedIn Profile: x     -> {"linkedin_profile": "x"}

Lines that do not match are skipped and reported; a repeated key keeps
the last value.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from resume_structurer.contexts.intake.resume_record import ParseDiagnostic
from resume_structurer.contexts.intake.section_patterns import match_key_value


@dataclass
class KeyValueBlock:
    """Parsed mapping plus the lines that did not contribute to it."""

    values: dict[str, str] = field(default_factory=dict)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)


def parse_key_value_lines(
    lines: Sequence[str],
    section: Optional[str] = None,
    line_numbers: Optional[Sequence[int]] = None,
) -> KeyValueBlock:
    """
    Parse "Label: value" lines into a normalized mapping.

    Args:
        lines: Section lines in source order
        section: Section name, for diagnostics only
        line_numbers: Source line number of each line, for diagnostics only

    Returns:
        KeyValueBlock with values and diagnostics
    """
    block = KeyValueBlock()

    for index, line in enumerate(lines):
        if not line.strip():
            continue

        pair = match_key_value(line)
        if pair is None:
            block.diagnostics.append(
                ParseDiagnostic(
                    line_number=line_numbers[index] if line_numbers else None,
                    line=line,
                    reason="not a 'Label: value' line",
                    section=section,
                )
            )
            continue

        key, value = pair
        if key in block.values:
            block.diagnostics.append(
                ParseDiagnostic(
                    line_number=line_numbers[index] if line_numbers else None,
                    line=line,
                    reason=f"duplicate key '{key}' overwrites earlier value",
                    section=section,
                )
            )
        block.values[key] = value

    return block
