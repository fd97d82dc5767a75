"""Travel document MRZ verification and visa eligibility scoring."""

from docverify.verification import VerificationProcessor, VerificationResult

__version__ = "0.1.0"

__all__ = [
    "VerificationProcessor",
    "VerificationResult",
]
