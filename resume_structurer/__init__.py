"""
Resume Structurer - turns generated resume text into structured records

A small parsing core that consumes the sectioned plain text produced by a
text-generation collaborator and hands render-ready records to preview and
export collaborators.

Architecture:
- Intake Context: Section segmentation, block parsing, and record assembly
"""

__version__ = "0.1.0"
