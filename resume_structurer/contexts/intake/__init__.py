"""
Intake Context

Responsibilities:
- Ingests sectioned resume text produced by a text-generation collaborator
- Segments it into named sections and parses key-value and multi-entry blocks
- Assembles an immutable ResumeRecord (or surfaces the ERROR channel)

Owns: Resume text parsing logic
Never: Generates resume content or decides how a record is rendered
"""

from resume_structurer.contexts.intake.assembler import (
    assemble_resume,
    parse_resume,
    parse_resume_file,
    parse_resume_lines,
    parse_resume_text,
)
from resume_structurer.contexts.intake.exceptions import (
    ParserConfigError,
    ResumeGenerationError,
)
from resume_structurer.contexts.intake.resume_record import (
    Entry,
    ParseDiagnostic,
    ParseResult,
    ResumeRecord,
)

__all__ = [
    "Entry",
    "ParseDiagnostic",
    "ParseResult",
    "ParserConfigError",
    "ResumeGenerationError",
    "ResumeRecord",
    "assemble_resume",
    "parse_resume",
    "parse_resume_file",
    "parse_resume_lines",
    "parse_resume_text",
]
