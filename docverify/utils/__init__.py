"""
Shared Utilities

Common constants and helpers used across all modules.
"""

from docverify.utils.logging_config import setup_logging

__all__ = [
    "setup_logging",
]
