"""
Unit tests for resume assembly.

Tests the public parse functions in resume_structurer.contexts.intake.assembler.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from resume_structurer.contexts.intake.assembler import (
    parse_resume,
    parse_resume_lines,
    parse_resume_text,
    split_skills,
)
from resume_structurer.contexts.intake.config import ParserConfig
from resume_structurer.contexts.intake.exceptions import ResumeGenerationError
from resume_structurer.contexts.intake.resume_record import Entry, ResumeRecord

EXPERIENCE_TEXT = """SECTION: EXPERIENCE
Title: Engineer
Company: Acme
- Built A
- Built B
Title: Analyst
Company: Globex
- Wrote C
- Wrote D
END_SECTION"""


@pytest.mark.unit
class TestSplitSkills:
    """Tests for split_skills function."""

    def test_trims_and_drops_empty_tokens(self):
        assert split_skills("Python,  Java ,, Go") == ["Python", "Java", "Go"]

    def test_none_and_blank(self):
        assert split_skills(None) == []
        assert split_skills("  ") == []
        assert split_skills(", ,") == []


@pytest.mark.unit
class TestParseResumeText:
    """Tests for parse_resume_text function."""

    def test_personal_info(self):
        result = parse_resume_text(
            "SECTION: PERSONAL_INFO\nName: Jane Doe\nEmail: jane@x.com\nEND_SECTION"
        )

        assert result.success
        assert result.record.personal_info == {"name": "Jane Doe", "email": "jane@x.com"}
        assert result.diagnostics == ()

    def test_experience_entries(self):
        record = parse_resume_text(EXPERIENCE_TEXT).record

        assert len(record.experience) == 2
        assert record.experience[0].details == ("Built A", "Built B")
        assert record.experience[1].details == ("Wrote C", "Wrote D")
        assert record.experience[1]["company"] == "Globex"

    def test_colon_less_line_ignored(self):
        """A stray sentence does not disturb sibling fields."""
        result = parse_resume_text(
            "SECTION: PERSONAL_INFO\nName: Jane\nAvailable immediately\nPhone: 555\nEND_SECTION"
        )

        assert result.record.personal_info == {"name": "Jane", "phone": "555"}
        assert [d.line for d in result.diagnostics] == ["Available immediately"]
        assert result.diagnostics[0].line_number == 3

    def test_skills(self):
        record = parse_resume_text("SECTION: SKILLS\nSkills: Python,  Java ,, Go\nEND_SECTION").record

        assert record.skills == ("Python", "Java", "Go")

    def test_skills_without_skills_key(self):
        record = parse_resume_text("SECTION: SKILLS\nLanguages: Go\nEND_SECTION").record

        assert record.skills == ()

    def test_empty_input_fully_defaulted(self):
        result = parse_resume_text("")

        assert result.success
        record = result.record
        assert record.personal_info == {}
        assert record.summary == ""
        assert record.experience == ()
        assert record.education == ()
        assert record.projects == ()
        assert record.skills == ()
        assert record.key_achievements == Entry(details=())
        assert record.to_dict()["keyAchievements"] == {"details": []}
        assert record == ResumeRecord()

    def test_reopened_section_accumulates_last_value_wins(self):
        """SKILLS reopened before END_SECTION: both buffers kept, later value wins."""
        result = parse_resume_text(
            "SECTION: SKILLS\nSkills: a\nSECTION: SKILLS\nSkills: b\nEND_SECTION"
        )

        assert result.record.skills == ("b",)
        reasons = [d.reason for d in result.diagnostics]
        assert "section reopened before END_SECTION" in reasons
        assert "duplicate key 'skills' overwrites earlier value" in reasons

    def test_summary_joined_and_trimmed(self):
        record = parse_resume_text(
            "SECTION: SUMMARY\n\n  First line.\nSecond line.  \n\nEND_SECTION"
        ).record

        assert record.summary == "First line.\nSecond line."

    def test_summary_concatenates_occurrences(self):
        record = parse_resume_text(
            "SECTION: SUMMARY\nOne\nEND_SECTION\nSECTION: SUMMARY\nTwo\nEND_SECTION"
        ).record

        assert record.summary == "One\nTwo"

    def test_key_achievements_first_entry(self):
        record = parse_resume_text(
            "SECTION: KEY_ACHIEVEMENTS\nTitle: Highlights\nDetails:\n- Won award\n- Grew revenue\nEND_SECTION"
        ).record

        assert record.key_achievements == Entry(
            fields={"title": "Highlights"}, details=("Won award", "Grew revenue")
        )

    def test_key_achievements_extra_entries_dropped(self):
        result = parse_resume_text(
            "SECTION: KEY_ACHIEVEMENTS\nTitle: First\n- a\nTitle: Second\n- b\nEND_SECTION"
        )

        assert result.record.key_achievements["title"] == "First"
        assert any("only the first is kept" in d.reason for d in result.diagnostics)

    def test_key_achievements_bullets_only(self):
        record = parse_resume_text("SECTION: KEY_ACHIEVEMENTS\n- a\n- b\nEND_SECTION").record

        assert record.key_achievements == Entry(details=("a", "b"))

    def test_education_uses_degree_marker(self):
        record = parse_resume_text(
            "SECTION: EDUCATION\nDegree: B.S.\nInstitution: MIT\nDegree: M.S.\nInstitution: CMU\nEND_SECTION"
        ).record

        assert [entry["institution"] for entry in record.education] == ["MIT", "CMU"]

    def test_projects_use_title_marker(self):
        record = parse_resume_text(
            "SECTION: PROJECTS\nTitle: A\n- x\nTitle: B\nEND_SECTION"
        ).record

        assert [entry["title"] for entry in record.projects] == ["A", "B"]
        assert record.projects[1].details is None

    def test_absent_field_stays_absent(self):
        record = parse_resume_text(EXPERIENCE_TEXT).record

        assert "location" not in record.experience[0].fields
        assert record.experience[0].get("location") is None

    def test_crlf_and_bom_tolerated(self):
        text = "\ufeffSECTION: PERSONAL_INFO\r\nName:\u00a0Jane\r\nEND_SECTION\r\n"

        record = parse_resume_text(text).record

        assert record.personal_info == {"name": "Jane"}

    def test_custom_config_markers(self):
        config = ParserConfig(
            entry_markers={
                "KEY_ACHIEVEMENTS": ("title",),
                "EXPERIENCE": ("role",),
                "EDUCATION": ("degree",),
                "PROJECTS": ("title",),
            }
        )
        text = "SECTION: EXPERIENCE\nRole: A\nTitle: x\nRole: B\nEND_SECTION"

        record = parse_resume_text(text, config).record

        assert [entry["role"] for entry in record.experience] == ["A", "B"]


@pytest.mark.unit
class TestErrorChannel:
    """Tests for the ERROR section side channel."""

    ERROR_TEXT = (
        "SECTION: ERROR\nThe uploaded document could not be read.\nEND_SECTION\n"
        "SECTION: SKILLS\nSkills: Go\nEND_SECTION"
    )

    def test_error_section_short_circuits(self):
        result = parse_resume_text(self.ERROR_TEXT)

        assert not result.success
        assert result.record is None
        assert result.error_message == "The uploaded document could not be read."

    def test_blank_error_section_ignored(self):
        result = parse_resume_text("SECTION: ERROR\n\nEND_SECTION\nSECTION: SKILLS\nSkills: Go\nEND_SECTION")

        assert result.success
        assert result.record.skills == ("Go",)
        assert any(d.reason == "empty ERROR section ignored" for d in result.diagnostics)

    def test_parse_resume_raises(self):
        with pytest.raises(ResumeGenerationError) as exc_info:
            parse_resume(self.ERROR_TEXT)

        assert exc_info.value.message == "The uploaded document could not be read."

    def test_parse_resume_returns_record(self):
        record = parse_resume("SECTION: SKILLS\nSkills: Go\nEND_SECTION")

        assert isinstance(record, ResumeRecord)
        assert record.skills == ("Go",)

    def test_error_to_dict(self):
        data = parse_resume_text(self.ERROR_TEXT).to_dict()

        assert data["status"] == "error"
        assert data["message"] == "The uploaded document could not be read."


@pytest.mark.unit
class TestDeterminism:
    """Parsing is pure and repeatable."""

    def test_identical_input_identical_output(self):
        first = parse_resume_text(EXPERIENCE_TEXT)
        second = parse_resume_text(EXPERIENCE_TEXT)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_lines_and_text_entry_points_agree(self):
        assert parse_resume_lines(EXPERIENCE_TEXT.split("\n")) == parse_resume_text(EXPERIENCE_TEXT)

    def test_concurrent_calls_independent(self):
        texts = [
            f"SECTION: PERSONAL_INFO\nName: Person {i}\nEND_SECTION\n{EXPERIENCE_TEXT}"
            for i in range(20)
        ]

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(parse_resume_text, texts))

        assert [r.record.personal_info["name"] for r in results] == [f"Person {i}" for i in range(20)]
        assert all(len(r.record.experience) == 2 for r in results)


@pytest.mark.unit
def test_partial_config_parses_without_error():
    """Sections missing from a caller's config fall back to default markers."""
    config = ParserConfig(entry_markers={"EXPERIENCE": ("role",)})
    text = (
        "SECTION: EXPERIENCE\nRole: A\nRole: B\nEND_SECTION\n"
        "SECTION: KEY_ACHIEVEMENTS\nTitle: Highlights\n- a\nEND_SECTION"
    )

    result = parse_resume_text(text, config)

    assert result.success
    assert [entry["role"] for entry in result.record.experience] == ["A", "B"]
    assert result.record.key_achievements["title"] == "Highlights"
