"""
Shared Constants for the Document Verification Pipeline

This module contains constants used across multiple modules to ensure
consistency and avoid duplication.
"""

# ============================================================================
# MRZ Layout Constants
# ============================================================================
# ICAO Doc 9303 machine-readable zone geometry
# Reference: https://www.icao.int/publications/pages/publication.aspx?docnum=9303
MRZ_FILLER = "<"
MRZ_ALPHABET = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<")
TD3_LINE_LENGTH = 44  # Passport: 2 lines x 44 characters
TD3_LINE_COUNT = 2
TD1_LINE_LENGTH = 30  # ID card: 3 lines x 30 characters
TD1_LINE_COUNT = 3

# Check digit weight cycle (7, 3, 1, 7, 3, 1, ...)
CHECK_DIGIT_WEIGHTS = (7, 3, 1)

# Two-digit years below the pivot belong to the 2000s, others to the 1900s
DEFAULT_CENTURY_PIVOT = 50

# ============================================================================
# Candidate Line Selection
# ============================================================================
MIN_MRZ_LINE_LENGTH = 28
MAX_MRZ_LINE_LENGTH = 44

# ============================================================================
# Confidence Thresholds (0-100 scale)
# ============================================================================
HIGH_CONFIDENCE = 80
MODERATE_CONFIDENCE = 60
MRZ_FIELD_CONFIDENCE = 90  # Confidence assigned to fields backfilled from MRZ

# ============================================================================
# Name Matching Thresholds (similarity ratio 0.0-1.0)
# ============================================================================
NAME_PASS_THRESHOLD = 0.8
NAME_WARNING_THRESHOLD = 0.6
