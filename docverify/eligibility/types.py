"""Type definitions for the eligibility module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ConfidenceBand(Enum):
    """Coarse confidence label used in summaries."""

    HIGH = "HIGH"  # >= 80
    MODERATE = "MODERATE"  # >= 60
    LOW = "LOW"


@dataclass(frozen=True)
class EligibilityOutcome:
    """Eligibility decision derived from a validation check list.

    Attributes:
        eligible: True iff no check failed
        confidence: Integer score (0-100) from pass/warning proportions
        reasons: Failures first, then warnings, then a success sentence
    """

    eligible: bool
    confidence: int
    reasons: List[str] = field(default_factory=list)
