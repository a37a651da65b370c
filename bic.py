#!/usr/bin/env python3
"""BIC resolution for ibanbic. Finds the bank behind an IBAN in the bank data repository."""

import sys
from dataclasses import dataclass, replace
from typing import Callable, Optional

from bank_repository import BankDataRepository, JsonFileRepository, RepositoryError
from banks import BankEntry, bank_code_length
from config import BIC_DB_FILE, COMMERZBANK_BIC
from iban import Iban, ValidationResult, format_iban, new_validation_result, parse_iban


@dataclass(frozen=True)
class BicOverrideRule:
    """Replaces the BIC of looked-up entries matching a predicate."""
    name: str
    matches: Callable[[str, BankEntry], bool]
    bic: str

    def apply(self, entry: BankEntry) -> BankEntry:
        """Copy of entry carrying the override BIC."""
        return replace(entry, bic=self.bic)


def _is_commerzbank(country_code: str, entry: BankEntry) -> bool:
    # BLZ xxx400xx are Commerzbank branches, whatever BIC the registry lists
    return (
        country_code == 'DE'
        and len(entry.bank_code) > 6
        and entry.bank_code[3:6] == '400'
    )


# Checked in order after a successful lookup, first match wins
BIC_OVERRIDE_RULES: list[BicOverrideRule] = [
    BicOverrideRule('commerzbank', _is_commerzbank, COMMERZBANK_BIC),
]


def apply_override_rules(
    country_code: str,
    entry: BankEntry,
    rules: list[BicOverrideRule] = None,
) -> BankEntry:
    """Return entry with the first matching override applied, or entry unchanged."""
    if rules is None:
        rules = BIC_OVERRIDE_RULES
    for rule in rules:
        if rule.matches(country_code, entry):
            return rule.apply(entry)
    return entry


def get_bank_information_by_country_and_bank_code(
    country_code: str,
    bank_code: str,
    repo: BankDataRepository,
) -> Optional[BankEntry]:
    """
    Look up a bank by exact bank code.

    Returns None if the bank code is unknown. RepositoryError propagates;
    it is not retried.
    """
    return repo.find(country_code, bank_code)


def resolve_bic(iban: Iban, result: ValidationResult, repo: BankDataRepository) -> ValidationResult:
    """
    Fill result.bank_data with the bank behind iban.

    Missing information (unknown country, short BBAN, unknown bank code) is
    appended to result.messages and result is returned without bank data.
    Returns the same result object.
    """
    length = bank_code_length(iban.country_code)
    if length is None:
        result.messages.append('Cannot get BIC. No information available.')
        return result

    if len(iban.bban) < length:
        result.messages.append(f'Cannot get BIC for BBAN {iban.bban}')
        return result

    bank_code = iban.bban[:length]
    bank_data = get_bank_information_by_country_and_bank_code(iban.country_code, bank_code, repo)

    if bank_data is None:
        result.messages.append(f'No BIC found for bank code: {bank_code}')
        return result

    result.bank_data = apply_override_rules(iban.country_code, bank_data)
    return result


def get_iban_info(raw: str, repo: BankDataRepository) -> dict:
    """
    Resolve the bank for an already validated IBAN.

    Returns dict with keys:
    - iban: normalized IBAN
    - valid: validity flag carried by the result
    - country: country code
    - bank: dict with bank_code, name, zip, city, bic (empty if not found)
    - messages: diagnostics collected during the lookup
    """
    iban = parse_iban(raw)
    result = resolve_bic(iban, new_validation_result(True, '', iban.raw), repo).to_dict()

    return {
        'iban': result['iban'],
        'valid': result['valid'],
        'country': iban.country_code,
        'bank': result['bank_data'],
        'messages': result['messages'],
    }


def main() -> None:
    if len(sys.argv) < 2:
        print('Usage: python3 bic.py <IBAN>')
        print('Example: python3 bic.py DE12120400000052065002')
        sys.exit(1)

    repo = JsonFileRepository(BIC_DB_FILE)
    try:
        info = get_iban_info(sys.argv[1], repo)
    except RepositoryError as e:
        print(f'Lookup failed: {e}', file=sys.stderr)
        sys.exit(1)

    bank = info['bank']
    print(f'Looking up: {format_iban(info["iban"])}')
    print('=' * 40)
    print(f"Country:   {info['country']}")
    print(f"Bank code: {bank['bank_code']}")
    print(f"Bank:      {bank['name']}")
    print(f"BIC:       {bank['bic']}")
    if bank['city']:
        location = ' '.join(part for part in (bank['zip'], bank['city']) if part)
        print(f'City:      {location}')
    for message in info['messages']:
        print(f'Note:      {message}')


if __name__ == '__main__':
    main()
