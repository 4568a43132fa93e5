"""
Resume record data structures for the Intake context.

Defines the immutable values produced by a parse call:
- Entry: one job, degree, project or achievement block
- ResumeRecord: the assembled resume handed to rendering/export collaborators
- ParseDiagnostic: a line the parser skipped or treated leniently
- ParseResult: tagged outcome (record or error message) plus diagnostics

Parser modules produce plain dicts and lists; these classes freeze them.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


def _freeze_mapping(values: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class ParseDiagnostic:
    """
    Record of a line that did not contribute to the parsed record.

    Attributes:
        line_number: 1-based line number in the raw document (None if unknown)
        line: The line text as it appeared
        reason: Short explanation (e.g., "line outside any section")
        section: Section the line belonged to, if any
    """

    line_number: Optional[int]
    line: str
    reason: str
    section: Optional[str] = None

    def __str__(self) -> str:
        location = f"line {self.line_number}" if self.line_number is not None else "line ?"
        if self.section:
            location += f" [{self.section}]"
        return f"{location}: {self.reason}: '{self.line.strip()}'"

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "line": self.line,
            "reason": self.reason,
            "section": self.section,
        }


@dataclass(frozen=True)
class Entry:
    """
    One structured record within a multi-entry section.

    Attributes:
        fields: Normalized key -> value (e.g., {"title": "Engineer", "company": "Acme"})
        details: Ordered bullet texts, or None if the entry never opened a details list
    """

    fields: Mapping[str, str] = field(default_factory=dict)
    details: Optional[tuple[str, ...]] = None

    # Read-only mappings are not hashable
    __hash__ = None

    def __post_init__(self):
        object.__setattr__(self, "fields", _freeze_mapping(self.fields))
        if self.details is not None:
            object.__setattr__(self, "details", tuple(self.details))

    def __getitem__(self, key: str) -> str:
        return self.fields[key]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(key, default)

    @property
    def is_empty(self) -> bool:
        return not self.fields and self.details is None

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-dict form for rendering collaborators.

        Fields are emitted as-is; "details" (when opened) is a list and takes
        precedence over a scalar field that happens to share the name.
        """
        data: dict[str, Any] = dict(self.fields)
        if self.details is not None:
            data["details"] = list(self.details)
        return data


@dataclass(frozen=True)
class ResumeRecord:
    """
    Structured resume assembled from generated text.

    Attributes:
        personal_info: Normalized key -> value (name, title, email, phone, linkedin, location, ...)
        summary: Summary paragraph(s), newline-joined and trimmed
        key_achievements: Single entry (title + details), never absent
        experience: Jobs in source order
        education: Degrees in source order
        projects: Projects in source order
        skills: Skill names in source order
    """

    personal_info: Mapping[str, str] = field(default_factory=dict)
    summary: str = ""
    key_achievements: Entry = field(default_factory=lambda: Entry(details=()))
    experience: tuple[Entry, ...] = ()
    education: tuple[Entry, ...] = ()
    projects: tuple[Entry, ...] = ()
    skills: tuple[str, ...] = ()

    __hash__ = None

    def __post_init__(self):
        object.__setattr__(self, "personal_info", _freeze_mapping(self.personal_info))
        object.__setattr__(self, "experience", tuple(self.experience))
        object.__setattr__(self, "education", tuple(self.education))
        object.__setattr__(self, "projects", tuple(self.projects))
        object.__setattr__(self, "skills", tuple(self.skills))

    @property
    def name(self) -> str:
        return self.personal_info.get("name", "")

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form keyed the way preview and export collaborators read it."""
        return {
            "personalInfo": dict(self.personal_info),
            "summary": self.summary,
            "keyAchievements": self.key_achievements.to_dict(),
            "experience": [entry.to_dict() for entry in self.experience],
            "education": [entry.to_dict() for entry in self.education],
            "projects": [entry.to_dict() for entry in self.projects],
            "skills": list(self.skills),
        }


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one generated document.

    Exactly one of record / error_message is set. A failure means the
    generator answered with a human-readable ERROR section instead of a
    resume; the message should be shown to the user as-is.
    """

    success: bool
    record: Optional[ResumeRecord] = None
    error_message: Optional[str] = None
    diagnostics: tuple[ParseDiagnostic, ...] = ()

    __hash__ = None

    def __post_init__(self):
        object.__setattr__(self, "diagnostics", tuple(self.diagnostics))

    @classmethod
    def ok(cls, record: ResumeRecord, diagnostics=()) -> "ParseResult":
        return cls(success=True, record=record, diagnostics=diagnostics)

    @classmethod
    def failed(cls, error_message: str, diagnostics=()) -> "ParseResult":
        return cls(success=False, error_message=error_message, diagnostics=diagnostics)

    def to_dict(self) -> dict[str, Any]:
        diagnostics = [diagnostic.to_dict() for diagnostic in self.diagnostics]
        if self.success:
            return {"status": "ok", "resume": self.record.to_dict(), "diagnostics": diagnostics}
        return {"status": "error", "message": self.error_message, "diagnostics": diagnostics}
