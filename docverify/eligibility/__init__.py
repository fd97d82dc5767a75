"""Eligibility Assessment & Recommendations.

Core Components:
    - types: Data structures (EligibilityOutcome, ConfidenceBand)
    - assessor: Check list -> eligibility decision and confidence
    - recommender: Recommended actions and summary text
"""

from .assessor import ALL_CHECKS_PASSED, assess_eligibility
from .recommender import confidence_band, generate_recommendations, generate_summary
from .types import ConfidenceBand, EligibilityOutcome

__all__ = [
    "ConfidenceBand",
    "EligibilityOutcome",
    "ALL_CHECKS_PASSED",
    "assess_eligibility",
    "confidence_band",
    "generate_recommendations",
    "generate_summary",
]
