#!/usr/bin/env python3
"""IBAN value types for ibanbic. Checksum validation happens upstream."""

import re
from dataclasses import dataclass, field

from banks import BankEntry


def normalize_iban(iban: str) -> str:
    """Remove spaces and convert to uppercase."""
    return re.sub(r'\s+', '', iban).upper()


def format_iban(iban: str) -> str:
    """Format IBAN with spaces every 4 characters."""
    iban = normalize_iban(iban)
    return ' '.join(iban[i:i+4] for i in range(0, len(iban), 4))


@dataclass(frozen=True)
class Iban:
    """An IBAN split into country code and BBAN."""
    country_code: str
    bban: str
    raw: str


def parse_iban(raw: str) -> Iban:
    """
    Split an IBAN into its parts.

    DE12 1204 0000 0052 0650 02 -> country 'DE', BBAN '120400000052065002'.
    The check digits are dropped; they are not verified here.
    """
    iban = normalize_iban(raw)
    return Iban(country_code=iban[:2], bban=iban[4:], raw=iban)


@dataclass
class ValidationResult:
    """Outcome of validating one IBAN. Messages accumulate across steps."""
    valid: bool
    iban: str = ''
    messages: list[str] = field(default_factory=list)
    bank_data: BankEntry = field(default_factory=BankEntry)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'valid': self.valid,
            'iban': self.iban,
            'messages': list(self.messages),
            'bank_data': self.bank_data.to_dict(),
        }


def new_validation_result(valid: bool, message: str, iban: str) -> ValidationResult:
    """Create a result with an optional first message."""
    return ValidationResult(
        valid=valid,
        iban=normalize_iban(iban),
        messages=[message] if message else [],
    )
