"""String normalization and edit-distance similarity.

Used by the cross-field validator to compare identifiers and names coming
from sources with different formatting (MRZ filler, OCR spacing, case).
"""

from typing import List


def normalize_identifier(text: str) -> str:
    """Uppercase text and keep only ASCII letters and digits.

    Example:
        >>> normalize_identifier("l898-902 c3")
        'L898902C3'
    """
    return "".join(
        char for char in text.upper() if "A" <= char <= "Z" or "0" <= char <= "9"
    )


def levenshtein_distance(first: str, second: str) -> int:
    """Edit distance with unit cost for insertion, deletion and substitution.

    Example:
        >>> levenshtein_distance("KITTEN", "SITTING")
        3
    """
    if len(first) < len(second):
        first, second = second, first

    previous: List[int] = list(range(len(second) + 1))
    for i, char_a in enumerate(first, start=1):
        current = [i]
        for j, char_b in enumerate(second, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current

    return previous[-1]


def name_similarity(first: str, second: str) -> float:
    """Similarity ratio in [0.0, 1.0] based on edit distance.

    ratio = (max_len - distance) / max_len, with 1.0 when both strings
    are empty. Symmetric in its arguments.

    Example:
        >>> name_similarity("ANNAMARIAERIKSSON", "ANNAMARIAERIKSSON")
        1.0
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(first, second)) / longest
