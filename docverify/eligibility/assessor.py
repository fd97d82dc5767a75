"""Eligibility assessment from validation checks.

The decision is driven by the check list alone:

- eligible = no FAIL check
- confidence = round(100 * (passes + 0.5 * warnings) / total), with total
  floored at 1 so an empty list scores 0 and is still eligible

The applicant form and policy are accepted for the reason text only.
"""

import logging
from typing import List, Optional, Sequence

from docverify.utils.evaluation import round_half_up
from docverify.validation.types import ApplicantForm, EligibilityPolicy, ValidationCheck

from .types import EligibilityOutcome

logger = logging.getLogger(__name__)

ALL_CHECKS_PASSED = "All validation checks passed"
WARNING_PREFIX = "Warning - "


def assess_eligibility(
    checks: Sequence[ValidationCheck],
    applicant_form: Optional[ApplicantForm] = None,
    policy: Optional[EligibilityPolicy] = None,
) -> EligibilityOutcome:
    """Aggregate validation checks into an eligibility decision.

    Args:
        checks: Validation checks from the cross-field validator
        applicant_form: Applicant data (not used for the decision)
        policy: Eligibility policy (not used for the decision)

    Returns:
        EligibilityOutcome with decision, confidence and ranked reasons

    Example:
        >>> outcome = assess_eligibility([])
        >>> outcome.eligible, outcome.confidence, outcome.reasons
        (True, 0, [])
    """
    failed = [c for c in checks if c.is_fail()]
    warnings = [c for c in checks if c.is_warning()]
    passed = [c for c in checks if c.is_pass()]

    eligible = len(failed) == 0
    total = max(len(checks), 1)
    confidence = round_half_up(100 * (len(passed) + 0.5 * len(warnings)) / total)

    reasons: List[str] = [f"{c.field}: {c.message}" for c in failed]
    reasons.extend(f"{WARNING_PREFIX}{c.field}: {c.message}" for c in warnings)
    if eligible and passed:
        reasons.append(ALL_CHECKS_PASSED)

    logger.info(
        f"Eligibility: eligible={eligible}, confidence={confidence}% "
        f"({len(passed)} pass, {len(warnings)} warning, {len(failed)} fail)"
    )
    return EligibilityOutcome(eligible=eligible, confidence=confidence, reasons=reasons)
