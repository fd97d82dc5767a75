"""MRZ candidate line selection from free OCR text.

OCR output of a document page mixes the visual inspection zone with the
machine-readable zone. MRZ lines are recognized by two properties only:

1. **Character set**: after removing whitespace, only [A-Z0-9<]
2. **Length**: between 28 and 44 characters (inclusive), wide enough to
   cover TD1 (30), TD2 (36) and TD3 (44) lines with some OCR slack

Example:
    >>> text = "PASSPORT\\nP<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<\\n..."
    >>> extract_mrz_lines(text)
    ['P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<']
"""

import logging
from typing import List

from docverify.utils.constants import MAX_MRZ_LINE_LENGTH, MIN_MRZ_LINE_LENGTH

from .validator import is_mrz_text

logger = logging.getLogger(__name__)


def extract_mrz_lines(
    text: str,
    min_length: int = MIN_MRZ_LINE_LENGTH,
    max_length: int = MAX_MRZ_LINE_LENGTH,
) -> List[str]:
    """Collect lines of text that look like MRZ lines.

    Args:
        text: Raw OCR text, possibly multi-line and noisy
        min_length: Minimum accepted line length after whitespace removal
        max_length: Maximum accepted line length after whitespace removal

    Returns:
        Candidate lines with whitespace removed, in input order. Empty if
        no line qualifies.
    """
    candidates: List[str] = []

    for line in text.splitlines():
        compact = "".join(line.split())
        if min_length <= len(compact) <= max_length and is_mrz_text(compact):
            candidates.append(compact)

    logger.debug(f"Selected {len(candidates)} MRZ candidate line(s)")
    return candidates
