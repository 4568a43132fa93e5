"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import Optional


class ResumeGenerationError(Exception):
    """
    Exception raised when the generated document is an ERROR message.

    The generator answers with a SECTION: ERROR block when it could not
    produce a resume (unreadable upload, too little detail, ...). The
    message is meant for the end user.

    Attributes:
        message: Human-readable error text from the ERROR section
        diagnostics: ParseDiagnostic records collected before the short-circuit
    """

    def __init__(self, message: str, diagnostics: tuple = ()):
        self.message = message
        self.diagnostics = tuple(diagnostics)
        super().__init__(message)


class ParserConfigError(ValueError):
    """
    Exception raised when a parser configuration file is invalid.

    Attributes:
        message: Error description
        config_path: Path of the offending YAML file, if loaded from disk
        key: Configuration key that failed validation
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[Path] = None,
        key: Optional[str] = None,
    ):
        self.message = message
        self.config_path = config_path
        self.key = key

        parts = [message]
        if key:
            parts.append(f"Key: {key}")
        if config_path:
            parts.append(f"Config file: {config_path}")

        super().__init__("\n".join(parts))
