#!/usr/bin/env python3
"""Bank code lengths per country and the canonical bank entry for ibanbic."""

from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Mapping, Optional

# Length of the national bank code at the start of the BBAN
COUNTRY_CODE_TO_BANK_CODE_LENGTH: Mapping[str, int] = MappingProxyType({
    'AT': 5,
    'BE': 3,
    'CH': 5,
    'DE': 8,
    'LI': 5,
    'LU': 3,
    'NL': 4,
})


def bank_code_length(
    country_code: str,
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> Optional[int]:
    """Bank code length for country, None if the country is not covered."""
    return lengths.get(country_code)


def pad_bank_code(bank_code: str, country_code: str, lengths: Mapping[str, int]) -> str:
    """Left-pad a bank code with zeros to the length registered for its country."""
    length = lengths.get(country_code)
    if length is None:
        return bank_code
    return bank_code.rjust(length, '0')


@dataclass
class BankEntry:
    """One institution as published in a national bank registry."""
    bank_code: str = ''
    name: str = ''
    zip: str = ''
    city: str = ''
    bic: str = ''
    country_code: str = ''
    # False for branch records (Bundesbank Merkmal 2)
    primary: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'BankEntry':
        """Build from a dictionary as written by to_dict."""
        return cls(
            bank_code=data.get('bank_code', ''),
            name=data.get('name', ''),
            zip=data.get('zip', ''),
            city=data.get('city', ''),
            bic=data.get('bic', ''),
            country_code=data.get('country_code', ''),
            primary=data.get('primary', True),
        )
