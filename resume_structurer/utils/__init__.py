"""
Shared utilities for Resume Structurer.

Common functionality used across contexts:
- Logging setup with provenance tracking
"""

from resume_structurer.utils.logger import log_provenance, setup_logger

__all__ = ["log_provenance", "setup_logger"]
