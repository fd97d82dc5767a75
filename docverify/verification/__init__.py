"""Document Verification Pipeline.

This module wires MRZ decoding, cross-field validation, eligibility
assessment and recommendations into a single entry point.

Core Components:
    - types: VerificationResult
    - config_loader: Configuration and policy loading with Pydantic validation
    - processor: Main verification pipeline
    - cli: Command-line entry point

Example:
    >>> from docverify.verification import VerificationProcessor
    >>> processor = VerificationProcessor()
    >>> result = processor.verify(ocr_text, ocr_confidence=87.0)
    >>> print(result.summary)
"""

from .config_loader import (
    Config,
    ConfidenceConfig,
    MatchingConfig,
    MRZConfig,
    VerificationModuleConfig,
    get_default_config,
    load_config,
    load_policy,
)
from .processor import (
    VerificationProcessor,
    calculate_overall_confidence,
    determine_document_type,
    enrich_fields,
)
from .types import VerificationResult

__all__ = [
    # Types
    "VerificationResult",
    # Configuration
    "Config",
    "VerificationModuleConfig",
    "MRZConfig",
    "MatchingConfig",
    "ConfidenceConfig",
    "load_config",
    "get_default_config",
    "load_policy",
    # Processing
    "VerificationProcessor",
    "enrich_fields",
    "determine_document_type",
    "calculate_overall_confidence",
]
