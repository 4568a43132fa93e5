"""
Default values for resume parsing.

Provides the entry-marker labels that start a new entry in each
multi-entry section, plus the bullet prefix for detail lines. Used by
config.py when no override file is given or a key is missing from it.
"""

from resume_structurer.contexts.intake.section_patterns import LinePatterns, SectionName

DEFAULT_ENTRY_MARKERS = {
    SectionName.KEY_ACHIEVEMENTS: ("title",),
    SectionName.EXPERIENCE: ("title",),
    SectionName.EDUCATION: ("degree",),
    SectionName.PROJECTS: ("title",),
}

DEFAULT_BULLET_PREFIX = LinePatterns.BULLET_PREFIX
