"""
Command-line verification of a single document.

Reads OCR text (and optionally extracted fields, an applicant form and a
policy) from files, runs the verification pipeline and prints the result
as JSON.

Usage:
    docverify --text page.txt --ocr-confidence 87 \\
        --applicant applicant.json --policy policy.yaml

Exit codes:
    0: Eligible
    1: Not eligible
    2: Invalid input
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from docverify.utils.logging_config import setup_logging
from docverify.validation.types import ApplicantForm, coerce_extracted_fields

from .config_loader import load_policy
from .processor import VerificationProcessor

logger = logging.getLogger(__name__)

EXIT_ELIGIBLE = 0
EXIT_NOT_ELIGIBLE = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Verify a travel document's MRZ and assess visa eligibility"
    )
    parser.add_argument("--text", type=Path, required=True, help="OCR text file")
    parser.add_argument(
        "--ocr-confidence",
        type=float,
        default=0.0,
        help="OCR engine confidence (0-100)",
    )
    parser.add_argument("--fields", type=Path, help="Extracted fields JSON file")
    parser.add_argument("--applicant", type=Path, help="Applicant form JSON file")
    parser.add_argument("--policy", type=Path, help="Eligibility policy YAML/JSON file")
    parser.add_argument("--config", type=Path, help="Configuration YAML file")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        help="Evaluation date (YYYY-MM-DD), defaults to today",
    )
    parser.add_argument("--output", type=Path, help="Write JSON result to this file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        setup_logging(args.log_level)
        ocr_text = args.text.read_text(encoding="utf-8")
        fields = (
            coerce_extracted_fields(_read_json(args.fields)) if args.fields else None
        )
        applicant = (
            ApplicantForm.model_validate(_read_json(args.applicant))
            if args.applicant
            else None
        )
        policy = load_policy(args.policy) if args.policy else None
        processor = VerificationProcessor(config_path=args.config)
        result = processor.verify(
            ocr_text,
            args.ocr_confidence,
            extracted_fields=fields,
            applicant_form=applicant,
            policy=policy,
            today=args.today,
        )
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Verification failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    output = json.dumps(result.to_dict(), indent=2)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info(f"Wrote result to {args.output}")
    else:
        print(output)

    return EXIT_ELIGIBLE if result.is_eligible() else EXIT_NOT_ELIGIBLE


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


if __name__ == "__main__":
    sys.exit(main())
