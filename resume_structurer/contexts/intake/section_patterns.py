"""
Pattern matching for generated resume text.

This module provides the regex patterns and name constants used to find
section boundaries, key-value lines, and detail lines in the text emitted by
the resume generation prompt.

Pattern classes follow the frozen-dataclass convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# SECTION NAMES
# =============================================================================


class SectionName:
    """Enum-like class for the section names the generator may emit"""

    PERSONAL_INFO = "PERSONAL_INFO"
    SUMMARY = "SUMMARY"
    KEY_ACHIEVEMENTS = "KEY_ACHIEVEMENTS"
    EXPERIENCE = "EXPERIENCE"
    EDUCATION = "EDUCATION"
    PROJECTS = "PROJECTS"
    SKILLS = "SKILLS"
    ERROR = "ERROR"


RECOGNIZED_SECTIONS = frozenset(
    {
        SectionName.PERSONAL_INFO,
        SectionName.SUMMARY,
        SectionName.KEY_ACHIEVEMENTS,
        SectionName.EXPERIENCE,
        SectionName.EDUCATION,
        SectionName.PROJECTS,
        SectionName.SKILLS,
        SectionName.ERROR,
    }
)

# Sections parsed into a list of entries (ERROR, SUMMARY etc. are not)
MULTI_ENTRY_SECTIONS = (
    SectionName.KEY_ACHIEVEMENTS,
    SectionName.EXPERIENCE,
    SectionName.EDUCATION,
    SectionName.PROJECTS,
)


# =============================================================================
# STRUCTURAL MARKER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SectionMarkerPatterns:
    """
    Regex patterns for the structural markers around each section.

    Markers are matched against the stripped line:
        SECTION: EXPERIENCE
        ...
        END_SECTION
    """

    # Begin marker, captures the section name (validated separately)
    BEGIN: str = r"^SECTION:\s*(.*?)\s*$"

    END: str = r"^END_SECTION$"


# =============================================================================
# LINE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LinePatterns:
    """
    Regex patterns for lines inside a section.

    KEY_VALUE label is a run of letters, digits and whitespace only, so
    "E-mail: x" or "**Name**: x" do not match. The value is everything after
    the first colon.
    """

    KEY_VALUE: str = r"^((?:[^\W_]|\s)+):(.*)$"

    WHITESPACE_RUN: str = r"\s+"

    # Trimmed line that opens a details list without adding to it
    DETAILS_HEADER: str = "details:"

    BULLET_PREFIX: str = "- "


# =============================================================================
# HELPERS
# =============================================================================


def match_begin_marker(line: str) -> Optional[str]:
    """
    Return the upper-cased section name if line is a begin marker.

    The name is returned even if it is not a recognized section; callers
    decide what to do with unknown names.
    """
    match = re.match(SectionMarkerPatterns.BEGIN, line.strip())
    if not match:
        return None
    return match.group(1).upper()


def is_end_marker(line: str) -> bool:
    return re.match(SectionMarkerPatterns.END, line.strip()) is not None


def normalize_key(label: str) -> str:
    """
    Normalize a label into a mapping key.

    Examples:
        "Name" -> "name"
        "  LinkedIn   Profile " -> "linkedin_profile"
    """
    return re.sub(LinePatterns.WHITESPACE_RUN, "_", label.strip().lower())


def match_key_value(line: str) -> Optional[tuple[str, str]]:
    """
    Split a "Label: value" line into (normalized key, trimmed value).

    Returns None if the line does not match or the label is blank.
    """
    match = re.match(LinePatterns.KEY_VALUE, line.strip())
    if not match:
        return None

    key = normalize_key(match.group(1))
    if not key:
        return None

    return key, match.group(2).strip()


def extract_label(line: str) -> Optional[str]:
    """Return the normalized text before the first colon, or None if there is no colon."""
    stripped = line.strip()
    if ":" not in stripped:
        return None
    return normalize_key(stripped.split(":", 1)[0])
