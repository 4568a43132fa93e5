"""
Resume assembly for the Intake context.

Orchestrates segmentation and block parsing into a ResumeRecord:

    raw text -> preprocess_resume_text -> segment_sections
             -> parse_key_value_lines / parse_entry_lines per section
             -> ResumeRecord wrapped in a ParseResult

A non-blank ERROR section short-circuits assembly: the generator answered
with a message for the user instead of a resume, so nothing else is parsed.

Parsing is pure and holds no module-level state; call it from as many
threads as needed.
"""

from pathlib import Path
from typing import Iterable, Optional

from resume_structurer.contexts.intake.config import ParserConfig
from resume_structurer.contexts.intake.entry_parser import parse_entry_lines
from resume_structurer.contexts.intake.exceptions import ResumeGenerationError
from resume_structurer.contexts.intake.key_value import parse_key_value_lines
from resume_structurer.contexts.intake.logger import _log_debug, _log_warning
from resume_structurer.contexts.intake.normalizer import preprocess_resume_text
from resume_structurer.contexts.intake.resume_record import (
    Entry,
    ParseDiagnostic,
    ParseResult,
    ResumeRecord,
)
from resume_structurer.contexts.intake.section_patterns import SectionName
from resume_structurer.contexts.intake.segmenter import SegmentedDocument, segment_sections

SKILLS_KEY = "skills"


def split_skills(value: Optional[str]) -> list[str]:
    """
    Split a comma-separated skills value.

    Examples:
        "Python,  Java ,, Go" -> ["Python", "Java", "Go"]
        None -> []
    """
    if not value:
        return []
    return [token.strip() for token in value.split(",") if token.strip()]


def _parse_entries(
    document: SegmentedDocument,
    section: str,
    config: ParserConfig,
    diagnostics: list[ParseDiagnostic],
) -> list[Entry]:
    numbered = document.numbered_lines(section)
    block = parse_entry_lines(
        [line for _, line in numbered],
        markers=config.markers_for(section),
        bullet_prefix=config.bullet_prefix,
        section=section,
        line_numbers=[number for number, _ in numbered],
    )
    diagnostics.extend(block.diagnostics)
    _log_debug(f"{section}: {len(block.entries)} entries from {len(numbered)} lines")
    return block.entries


def _parse_key_values(
    document: SegmentedDocument, section: str, diagnostics: list[ParseDiagnostic]
) -> dict[str, str]:
    numbered = document.numbered_lines(section)
    block = parse_key_value_lines(
        [line for _, line in numbered],
        section=section,
        line_numbers=[number for number, _ in numbered],
    )
    diagnostics.extend(block.diagnostics)
    return block.values


def assemble_resume(
    document: SegmentedDocument, config: Optional[ParserConfig] = None
) -> ParseResult:
    """
    Build a ResumeRecord from segmented sections.

    Args:
        document: Output of segment_sections()
        config: Entry markers and bullet prefix (defaults if None)

    Returns:
        ParseResult holding either the record or the ERROR section message
    """
    config = config or ParserConfig()
    diagnostics = list(document.diagnostics)

    if SectionName.ERROR in document.sections:
        error_message = "\n".join(document.lines(SectionName.ERROR)).strip()
        if error_message:
            _log_warning("Generated text is an ERROR section; skipping structured parsing")
            return ParseResult.failed(error_message, diagnostics)
        diagnostics.append(
            ParseDiagnostic(
                line_number=None,
                line="SECTION: ERROR",
                reason="empty ERROR section ignored",
                section=SectionName.ERROR,
            )
        )

    personal_info = _parse_key_values(document, SectionName.PERSONAL_INFO, diagnostics)
    summary = "\n".join(document.lines(SectionName.SUMMARY)).strip()

    achievements = _parse_entries(document, SectionName.KEY_ACHIEVEMENTS, config, diagnostics)
    if len(achievements) > 1:
        for extra in achievements[1:]:
            diagnostics.append(
                ParseDiagnostic(
                    line_number=None,
                    line=extra.get("title", ""),
                    reason="additional key achievements entry dropped (only the first is kept)",
                    section=SectionName.KEY_ACHIEVEMENTS,
                )
            )
    key_achievements = achievements[0] if achievements else Entry(details=())

    experience = _parse_entries(document, SectionName.EXPERIENCE, config, diagnostics)
    education = _parse_entries(document, SectionName.EDUCATION, config, diagnostics)
    projects = _parse_entries(document, SectionName.PROJECTS, config, diagnostics)

    skill_values = _parse_key_values(document, SectionName.SKILLS, diagnostics)
    skills = split_skills(skill_values.get(SKILLS_KEY))

    record = ResumeRecord(
        personal_info=personal_info,
        summary=summary,
        key_achievements=key_achievements,
        experience=experience,
        education=education,
        projects=projects,
        skills=skills,
    )
    return ParseResult.ok(record, diagnostics)


def parse_resume_lines(
    lines: Iterable[str], config: Optional[ParserConfig] = None
) -> ParseResult:
    """
    Parse already-split document lines.

    Args:
        lines: Ordered document lines
        config: Entry markers and bullet prefix (defaults if None)

    Returns:
        ParseResult (never raises on malformed input)
    """
    document = segment_sections(lines)
    _log_debug(f"Sections found: {sorted(document.sections)}")
    return assemble_resume(document, config)


def parse_resume_text(text: str, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Parse generated resume text into a tagged result.

    This is the main parsing function. Malformed lines never raise; they are
    dropped and listed in ParseResult.diagnostics.

    Args:
        text: Raw generated text with SECTION / END_SECTION markers
        config: Entry markers and bullet prefix (defaults if None)

    Returns:
        ParseResult with the record, or the ERROR section message
    """
    result = parse_resume_lines(preprocess_resume_text(text), config)
    _log_debug(
        f"Parse {'succeeded' if result.success else 'returned ERROR'} "
        f"with {len(result.diagnostics)} diagnostic(s)"
    )
    return result


def parse_resume(text: str, config: Optional[ParserConfig] = None) -> ResumeRecord:
    """
    Parse generated resume text, raising if it is an ERROR message.

    Args:
        text: Raw generated text
        config: Entry markers and bullet prefix (defaults if None)

    Returns:
        ResumeRecord

    Raises:
        ResumeGenerationError: If the text carries a non-blank ERROR section
    """
    result = parse_resume_text(text, config)
    if not result.success:
        raise ResumeGenerationError(result.error_message, result.diagnostics)
    return result.record


def parse_resume_file(file_path: Path, config: Optional[ParserConfig] = None) -> ParseResult:
    """
    Parse generated resume text from a file.

    Args:
        file_path: Path to a UTF-8 text file

    Returns:
        ParseResult
    """
    text = Path(file_path).read_text(encoding="utf-8")
    return parse_resume_text(text, config)
