#!/usr/bin/env python3
"""
Record parsers for the national bank registries.

Every parser takes one already-read record (a text line or a spreadsheet
row) and returns BankEntry values. Parsers never touch the filesystem.
"""

from enum import Enum
from typing import Any, Mapping, Sequence

from banks import COUNTRY_CODE_TO_BANK_CODE_LENGTH, BankEntry, pad_bank_code


class RegistryFormat(str, Enum):
    """Source formats of the supported national registries."""
    AUSTRIA = 'austria'
    BUNDESBANK = 'bundesbank'
    BELGIUM = 'belgium'
    NETHERLANDS = 'netherlands'
    LUXEMBOURG = 'luxembourg'
    SWITZERLAND = 'switzerland'
    LIECHTENSTEIN = 'liechtenstein'


LINE_FORMATS = frozenset({RegistryFormat.AUSTRIA, RegistryFormat.BUNDESBANK})


class RegistryError(Exception):
    """Base class for registry ingestion failures."""


class RecordParseError(RegistryError):
    """A registry record does not match the layout of its format."""

    def __init__(self, message: str, fmt: RegistryFormat = None, line: int = None):
        super().__init__(message)
        self.fmt = fmt
        self.line = line


# Bundesbank BLZ file format (fixed-width)
# Position 1-8:     Bankleitzahl (BLZ)
# Position 9:       Merkmal (1=Hauptstelle, 2=Nebenstelle)
# Position 10-67:   Bezeichnung (bank name)
# Position 68-72:   PLZ (zip)
# Position 73-107:  Ort (city)
# Position 140-150: BIC
BUNDESBANK_MIN_LENGTH = 150

# OeNB Bankstellenverzeichnis, semicolon separated
AUSTRIA_BANK_CODE = 2
AUSTRIA_NAME = 6
AUSTRIA_ZIP = 8
AUSTRIA_CITY = 9
AUSTRIA_BIC = 19

# NBB: from, to, BIC, name (nl), name (fr), name (de), name (en)
BELGIUM_UNASSIGNED_BICS = frozenset({'', 'NAV', 'VRIJ', '-'})

# SIX Bankenstamm
SWITZERLAND_IID = 1
SWITZERLAND_NAME = 12
SWITZERLAND_ZIP = 15
SWITZERLAND_CITY = 16
SWITZERLAND_BIC = 22


def cell_text(value: Any) -> str:
    """Convert a spreadsheet cell value to stripped text."""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _require(record: Sequence, count: int, fmt: RegistryFormat) -> None:
    if len(record) < count:
        raise RecordParseError(
            f'{fmt.value}: expected at least {count} fields, got {len(record)}',
            fmt=fmt,
        )


def _csv_field(value: str) -> str:
    return value.strip().strip('"').strip()


def austria_line_to_entry(
    line: str,
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> BankEntry:
    """Parse one line of the OeNB bank directory."""
    fields = [_csv_field(f) for f in line.split(';')]
    _require(fields, AUSTRIA_BIC + 1, RegistryFormat.AUSTRIA)

    return BankEntry(
        bank_code=pad_bank_code(fields[AUSTRIA_BANK_CODE], 'AT', lengths),
        name=fields[AUSTRIA_NAME],
        zip=fields[AUSTRIA_ZIP],
        city=fields[AUSTRIA_CITY],
        bic=fields[AUSTRIA_BIC].replace(' ', '').upper(),
        country_code='AT',
    )


def bundesbank_line_to_entry(line: str) -> BankEntry:
    """Parse one line of the Bundesbank BLZ file."""
    if len(line) < BUNDESBANK_MIN_LENGTH:
        raise RecordParseError(
            f'bundesbank: line shorter than {BUNDESBANK_MIN_LENGTH} characters',
            fmt=RegistryFormat.BUNDESBANK,
        )

    return BankEntry(
        bank_code=line[0:8].strip(),
        name=line[9:67].strip(),
        zip=line[67:72].strip(),
        city=line[72:107].strip(),
        bic=line[139:150].strip(),
        country_code='DE',
        primary=line[8:9] == '1',
    )


def belgium_row_to_entries(
    row: Sequence[Any],
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> list[BankEntry]:
    """
    Parse one row of the NBB protocol list.

    A row assigns a range of bank codes to one institution, so it expands
    to one entry per code. Free or unassigned ranges yield no entries.
    """
    cells = [cell_text(c) for c in row]
    _require(cells, 7, RegistryFormat.BELGIUM)

    first, last = cells[0], cells[1] or cells[0]
    if not (first.isdigit() and last.isdigit()):
        return []

    bic = cells[2].replace(' ', '').upper()
    if bic in BELGIUM_UNASSIGNED_BICS:
        return []

    dutch, french, german, english = cells[3:7]
    name = english or dutch or french or german

    return [
        BankEntry(
            bank_code=pad_bank_code(str(code), 'BE', lengths),
            name=name,
            bic=bic,
            country_code='BE',
        )
        for code in range(int(first), int(last) + 1)
    ]


def netherlands_row_to_entry(row: Sequence[Any]) -> BankEntry:
    """Parse one row of the DNB BIC list (BIC, bank code, name)."""
    cells = [cell_text(c) for c in row]
    _require(cells, 3, RegistryFormat.NETHERLANDS)

    return BankEntry(
        bank_code=cells[1].upper(),
        name=cells[2],
        bic=cells[0].replace(' ', '').upper(),
        country_code='NL',
    )


def luxembourg_row_to_entry(
    row: Sequence[Any],
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> BankEntry:
    """Parse one row of the ABBL list (name, bank code, BIC)."""
    cells = [cell_text(c) for c in row]
    _require(cells, 3, RegistryFormat.LUXEMBOURG)

    return BankEntry(
        bank_code=pad_bank_code(cells[1], 'LU', lengths) if cells[1].isdigit() else cells[1],
        name=cells[0],
        bic=cells[2].replace(' ', '').upper(),
        country_code='LU',
    )


def switzerland_row_to_entry(
    row: Sequence[Any],
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> BankEntry:
    """Parse one row of the SIX bank master."""
    cells = [cell_text(c) for c in row]
    _require(cells, SWITZERLAND_BIC + 1, RegistryFormat.SWITZERLAND)

    return BankEntry(
        bank_code=pad_bank_code(cells[SWITZERLAND_IID], 'CH', lengths),
        name=cells[SWITZERLAND_NAME],
        zip=cells[SWITZERLAND_ZIP],
        city=cells[SWITZERLAND_CITY],
        bic=cells[SWITZERLAND_BIC].replace(' ', '').upper(),
        country_code='CH',
    )


def liechtenstein_row_to_entry(
    row: Sequence[Any],
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> BankEntry:
    """Parse one row of the Liechtenstein bank list (bank code, name, zip, city, BIC)."""
    cells = [cell_text(c) for c in row]
    _require(cells, 5, RegistryFormat.LIECHTENSTEIN)

    return BankEntry(
        bank_code=pad_bank_code(cells[0], 'LI', lengths),
        name=cells[1],
        zip=cells[2],
        city=cells[3],
        bic=cells[4].replace(' ', '').upper(),
        country_code='LI',
    )
