"""
Resume text normalizer for the Intake context.

Generated text often arrives with invisible characters (BOM, zero-width
joiners, non-breaking spaces) and mixed line endings that break marker
detection. These are removed before segmentation.

Visible characters (quotes, dashes, bullets) are left untouched so field
values reach the renderer exactly as generated.
"""

# Unicode replacements: invisible char → ASCII equivalent
INVISIBLE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space → space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters → remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM / zero-width no-break space
}


def strip_invisible_characters(text: str) -> str:
    """
    Remove invisible characters that defeat marker and label matching.

    Args:
        text: Raw generated text

    Returns:
        Text with invisible characters removed or replaced by plain spaces
    """
    for char, replacement in INVISIBLE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def split_lines(text: str) -> list[str]:
    """
    Split text into lines, accepting \\n, \\r\\n and \\r endings.

    An empty string yields no lines.
    """
    return text.splitlines()


def preprocess_resume_text(text: str) -> list[str]:
    """
    Preprocess generated resume text before segmentation.

    This is the main entry point for text normalization.

    Args:
        text: Raw generated resume text

    Returns:
        Ordered list of lines ready for the segmenter
    """
    return split_lines(strip_invisible_characters(text or ""))
