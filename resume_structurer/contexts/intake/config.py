"""
Parser configuration for the Intake context.

Entry markers and the bullet prefix default to the values in defaults.py.
A YAML override can be supplied via RESUME_PARSER_CONFIG_PATH (or passed
explicitly), for when the generation prompt changes its field labels:

    entry_markers:
      EXPERIENCE: [title, role]
      EDUCATION: [degree]
    bullet_prefix: "- "

Keys missing from the override keep their defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from resume_structurer.contexts.intake.defaults import (
    DEFAULT_BULLET_PREFIX,
    DEFAULT_ENTRY_MARKERS,
)
from resume_structurer.contexts.intake.exceptions import ParserConfigError
from resume_structurer.contexts.intake.section_patterns import (
    MULTI_ENTRY_SECTIONS,
    normalize_key,
)

load_dotenv()
CONFIG_PATH_ENV = "RESUME_PARSER_CONFIG_PATH"


@dataclass(frozen=True)
class ParserConfig:
    """
    Settings that shape how multi-entry sections are split.

    Attributes:
        entry_markers: Section name -> labels that open a new entry (normalized keys)
        bullet_prefix: Prefix that marks a detail line
    """

    entry_markers: Dict[str, tuple] = field(default_factory=lambda: dict(DEFAULT_ENTRY_MARKERS))
    bullet_prefix: str = DEFAULT_BULLET_PREFIX

    def __post_init__(self):
        # Sections the caller left out keep their default markers
        merged = dict(DEFAULT_ENTRY_MARKERS)
        for section, markers in self.entry_markers.items():
            if isinstance(markers, str):
                markers = (markers,)
            merged[str(section).upper()] = tuple(markers)
        object.__setattr__(self, "entry_markers", merged)

    def markers_for(self, section: str) -> frozenset:
        """Return the normalized marker set for a multi-entry section."""
        return frozenset(normalize_key(marker) for marker in self.entry_markers[section])


def build_parser_config(overrides: Dict[str, Any], config_path: Optional[Path] = None) -> ParserConfig:
    """
    Merge an override dict onto the defaults and validate it.

    Args:
        overrides: Dict with optional "entry_markers" and "bullet_prefix" keys
        config_path: Source path, only used in error messages

    Returns:
        Validated ParserConfig

    Raises:
        ParserConfigError: If entry_markers is not a mapping, a section is
            unknown, a marker list is empty, or the bullet prefix is blank
    """
    overrides = overrides or {}
    unknown_keys = set(overrides) - {"entry_markers", "bullet_prefix"}
    if unknown_keys:
        raise ParserConfigError(
            f"Unknown configuration keys: {sorted(unknown_keys)}", config_path=config_path
        )

    marker_overrides = overrides.get("entry_markers") or {}
    if not isinstance(marker_overrides, dict):
        raise ParserConfigError(
            "entry_markers must map section names to label lists",
            config_path=config_path,
            key="entry_markers",
        )

    entry_markers = dict(DEFAULT_ENTRY_MARKERS)
    for section, markers in marker_overrides.items():
        section_name = str(section).upper()
        if section_name not in MULTI_ENTRY_SECTIONS:
            raise ParserConfigError(
                f"'{section}' is not a multi-entry section (expected one of {list(MULTI_ENTRY_SECTIONS)})",
                config_path=config_path,
                key=f"entry_markers.{section}",
            )
        if isinstance(markers, str):
            markers = [markers]
        cleaned = tuple(str(marker) for marker in markers or [] if str(marker).strip())
        if not cleaned:
            raise ParserConfigError(
                "Marker list must name at least one label",
                config_path=config_path,
                key=f"entry_markers.{section}",
            )
        entry_markers[section_name] = cleaned

    bullet_prefix = overrides.get("bullet_prefix", DEFAULT_BULLET_PREFIX)
    if not isinstance(bullet_prefix, str) or not bullet_prefix.strip():
        raise ParserConfigError(
            "bullet_prefix must be a non-blank string", config_path=config_path, key="bullet_prefix"
        )

    return ParserConfig(entry_markers=entry_markers, bullet_prefix=bullet_prefix)


def load_parser_config(config_path: Optional[Path] = None) -> ParserConfig:
    """
    Load parser configuration from YAML, falling back to defaults.

    Args:
        config_path: Optional path to a YAML override (defaults to the
            RESUME_PARSER_CONFIG_PATH environment variable, if set)

    Returns:
        ParserConfig with overrides applied

    Raises:
        ParserConfigError: If the file is missing, is not valid YAML, or fails validation
    """
    if config_path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        if not env_path:
            return ParserConfig()
        config_path = Path(env_path)

    config_path = Path(config_path)
    if not config_path.exists():
        raise ParserConfigError("Parser config file not found", config_path=config_path)

    try:
        overrides = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    except Exception as e:
        raise ParserConfigError(f"Could not read parser config: {e}", config_path=config_path) from e
    if overrides is not None and not isinstance(overrides, dict):
        raise ParserConfigError("Parser config must be a mapping", config_path=config_path)

    return build_parser_config(overrides, config_path=config_path)
