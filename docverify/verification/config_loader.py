"""Configuration loader with Pydantic validation for the verification module.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values, plus loading of
eligibility policies from YAML or JSON files.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from docverify.utils.constants import (
    DEFAULT_CENTURY_PIVOT,
    HIGH_CONFIDENCE,
    MAX_MRZ_LINE_LENGTH,
    MIN_MRZ_LINE_LENGTH,
    MODERATE_CONFIDENCE,
    MRZ_FIELD_CONFIDENCE,
    NAME_PASS_THRESHOLD,
    NAME_WARNING_THRESHOLD,
)
from docverify.validation.types import EligibilityPolicy

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class MRZConfig(BaseModel):
    """MRZ selection and decoding configuration.

    Attributes:
        min_line_length: Minimum candidate line length after whitespace removal
        max_line_length: Maximum candidate line length after whitespace removal
        century_pivot: Two-digit years below this map to 20YY, others to 19YY
        field_confidence: Confidence (0-100) given to fields backfilled from MRZ
    """

    min_line_length: int = Field(default=MIN_MRZ_LINE_LENGTH, gt=0)
    max_line_length: int = Field(default=MAX_MRZ_LINE_LENGTH, gt=0)
    century_pivot: int = Field(default=DEFAULT_CENTURY_PIVOT, ge=0, le=100)
    field_confidence: float = Field(default=MRZ_FIELD_CONFIDENCE, ge=0.0, le=100.0)

    @model_validator(mode="after")
    def _check_length_range(self) -> "MRZConfig":
        if self.min_line_length > self.max_line_length:
            raise ValueError(
                f"min_line_length ({self.min_line_length}) must not exceed "
                f"max_line_length ({self.max_line_length})"
            )
        return self


class MatchingConfig(BaseModel):
    """Name matching thresholds (similarity ratio 0.0-1.0).

    Attributes:
        name_pass_threshold: Similarity above which the name check passes
        name_warning_threshold: Similarity above which it is a warning
    """

    name_pass_threshold: float = Field(default=NAME_PASS_THRESHOLD, ge=0.0, le=1.0)
    name_warning_threshold: float = Field(
        default=NAME_WARNING_THRESHOLD, ge=0.0, le=1.0
    )


class ConfidenceConfig(BaseModel):
    """Confidence band thresholds (0-100).

    Attributes:
        high: Minimum confidence for HIGH band and automatic approval
        moderate: Minimum confidence for MODERATE band
    """

    high: float = Field(default=HIGH_CONFIDENCE, ge=0.0, le=100.0)
    moderate: float = Field(default=MODERATE_CONFIDENCE, ge=0.0, le=100.0)


class VerificationModuleConfig(BaseModel):
    """Complete verification module configuration.

    Attributes:
        mrz: MRZ selection and decoding configuration
        matching: Name matching thresholds
        confidence: Confidence band thresholds
    """

    mrz: MRZConfig = MRZConfig()
    matching: MatchingConfig = MatchingConfig()
    confidence: ConfidenceConfig = ConfidenceConfig()


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        verification: Verification module configuration
    """

    verification: VerificationModuleConfig = VerificationModuleConfig()


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    The file may either contain the module sections at top level or nest
    them under a "verification" key.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If configuration validation fails

    Example:
        >>> config = load_config(Path("docverify/verification/config.yaml"))
        >>> print(config.verification.mrz.century_pivot)
        50
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading verification config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    if "verification" in config_dict:
        config_dict = config_dict["verification"] or {}

    # Wrap flat YAML structure in 'verification' key for Config model
    return Config(verification=VerificationModuleConfig(**config_dict))


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from docverify/verification/config.yaml
    """
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()


def load_policy(policy_path: Path) -> EligibilityPolicy:
    """Load an eligibility policy from a YAML or JSON file.

    Keys may be snake_case or camelCase (e.g. "minAge").

    Args:
        policy_path: Path to .yaml, .yml or .json policy file

    Returns:
        Validated EligibilityPolicy

    Raises:
        FileNotFoundError: If policy file does not exist
        yaml.YAMLError / json.JSONDecodeError: If parsing fails
        pydantic.ValidationError: If the policy is invalid
    """
    if not policy_path.exists():
        raise FileNotFoundError(f"Policy file not found: {policy_path}")

    with open(policy_path, "r", encoding="utf-8") as f:
        if policy_path.suffix.lower() == ".json":
            raw = json.load(f)
        else:
            raw = yaml.safe_load(f)

    policy = EligibilityPolicy.model_validate(raw or {})
    logger.info(f"Loaded eligibility policy from {policy_path}")
    return policy
