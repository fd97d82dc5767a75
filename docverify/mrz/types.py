"""Type definitions for the MRZ module.

This module defines the decoded machine-readable zone record and the layouts
recognized by the decoder, following ICAO Doc 9303.
"""

from dataclasses import dataclass
from enum import Enum


class MRZLayout(Enum):
    """ICAO 9303 layout the record was decoded from."""

    TD3 = "td3"  # Passport: 2 lines x 44 characters
    TD1 = "td1"  # ID card: 3 lines x 30 characters


@dataclass(frozen=True)
class MRZRecord:
    """Structured identity data decoded from an MRZ.

    Attributes:
        document_type: Document code with trailing filler removed (e.g. "P")
        issuing_country: Issuing state code (ISO 3166-1 alpha-3 or ICAO code)
        document_number: Document number with trailing filler removed
        date_of_birth: ISO-8601 date ("YYYY-MM-DD"), empty if undecodable
        expiry_date: ISO-8601 date ("YYYY-MM-DD"), empty if undecodable
        nationality: Nationality code with trailing filler removed
        surname: Primary identifier, filler replaced by spaces
        given_names: Secondary identifier, filler replaced by spaces
        sex: Single character ("M", "F" or "<")
        checksum_valid: True only if every check digit verified by the
            layout passes. Always True for TD1.
        layout: Layout the record was decoded from
        checksums_verified: Whether check digits were actually verified.
            False for TD1, whose check digits are not decoded.
    """

    document_type: str
    issuing_country: str
    document_number: str
    date_of_birth: str
    expiry_date: str
    nationality: str
    surname: str
    given_names: str
    sex: str
    checksum_valid: bool
    layout: MRZLayout = MRZLayout.TD3
    checksums_verified: bool = True

    @property
    def full_name(self) -> str:
        """Given names followed by surname, as printed in the visual zone."""
        return f"{self.given_names} {self.surname}".strip()
