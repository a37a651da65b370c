#!/usr/bin/env python3
"""
Registry file ingestion for ibanbic.

ingest_file() turns one registry file into a stream of results, in source
order:

- Entry:   one parsed bank
- Entries: several banks parsed from a single spreadsheet row
- ABSENT:  the source had no usable data; always the last item

Line-oriented sources (Austria, Bundesbank) degrade to ABSENT when the file
is missing or a blank record is reached. Spreadsheet sources raise
RegistryReadError when the workbook cannot be read, except Liechtenstein,
which yields ABSENT instead.
"""

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, Mapping, Union
from xml.etree.ElementTree import ParseError
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from banks import COUNTRY_CODE_TO_BANK_CODE_LENGTH, BankEntry
from config import (
    AUSTRIA_ENCODING, AUSTRIA_HEADER_LINES, BUNDESBANK_ENCODING,
    SPREADSHEET_HEADER_ROWS, LIECHTENSTEIN_HEADER_ROWS,
)
from registry_parsers import (
    LINE_FORMATS, RegistryFormat, RegistryError, RecordParseError,
    austria_line_to_entry, bundesbank_line_to_entry, belgium_row_to_entries,
    netherlands_row_to_entry, luxembourg_row_to_entry,
    switzerland_row_to_entry, liechtenstein_row_to_entry,
)


class RegistryReadError(RegistryError):
    """A spreadsheet registry could not be opened or read."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class Entry:
    """A single parsed bank."""
    entry: BankEntry


@dataclass(frozen=True)
class Entries:
    """All banks parsed from one source row."""
    entries: tuple[BankEntry, ...]


@dataclass(frozen=True)
class Absent:
    """The source had no usable data."""


ABSENT = Absent()

IngestResult = Union[Entry, Entries, Absent]


def read_sheet_rows(path: Union[str, Path]) -> list[list[Any]]:
    """
    Read all rows of the first worksheet.

    Rows are padded to the width of the widest row. Raises RegistryReadError
    if the workbook cannot be opened or its sheet XML is broken.
    """
    workbook = None
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
        rows = [list(row) for row in workbook.worksheets[0].iter_rows(values_only=True)]
    except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError, ParseError) as e:
        raise RegistryReadError(f'Cannot read spreadsheet {path}: {e}', path=Path(path)) from e
    finally:
        if workbook is not None:
            workbook.close()

    width = max((len(row) for row in rows), default=0)
    return [row + [None] * (width - len(row)) for row in rows]


def _is_blank(row: list[Any]) -> bool:
    return all(value is None or str(value).strip() == '' for value in row)


def _with_position(parse: Callable, record: Any, number: int) -> Any:
    try:
        return parse(record)
    except RecordParseError as e:
        e.line = number
        raise


def _austria_lines(lines: Iterator[str], lengths: Mapping[str, int]) -> Iterator[IngestResult]:
    first = next(lines, '')
    if not first:
        yield ABSENT
        return

    parse = partial(austria_line_to_entry, lengths=lengths)
    for number, line in enumerate(lines, start=2):
        if number <= AUSTRIA_HEADER_LINES:
            continue
        if not line:
            yield ABSENT
            return
        yield Entry(_with_position(parse, line, number))


def _bundesbank_lines(lines: Iterator[str]) -> Iterator[IngestResult]:
    seen = False
    for number, line in enumerate(lines, start=1):
        if not line:
            yield ABSENT
            return
        seen = True
        yield Entry(_with_position(bundesbank_line_to_entry, line, number))

    if not seen:
        yield ABSENT


def _ingest_lines(
    fmt: RegistryFormat,
    path: Union[str, Path],
    lengths: Mapping[str, int],
) -> Iterator[IngestResult]:
    encoding = AUSTRIA_ENCODING if fmt is RegistryFormat.AUSTRIA else BUNDESBANK_ENCODING

    try:
        handle = open(path, 'r', encoding=encoding, errors='replace', newline='')
    except OSError:
        yield ABSENT
        return

    with handle:
        lines = (line.rstrip('\r\n') for line in handle)
        if fmt is RegistryFormat.AUSTRIA:
            yield from _austria_lines(lines, lengths)
        else:
            yield from _bundesbank_lines(lines)


def _spreadsheet_layout(fmt: RegistryFormat, lengths: Mapping[str, int]) -> tuple[int, Callable]:
    """Header row count and row parser for a spreadsheet format."""
    if fmt is RegistryFormat.BELGIUM:
        return SPREADSHEET_HEADER_ROWS, partial(belgium_row_to_entries, lengths=lengths)
    if fmt is RegistryFormat.NETHERLANDS:
        return SPREADSHEET_HEADER_ROWS, netherlands_row_to_entry
    if fmt is RegistryFormat.LUXEMBOURG:
        return SPREADSHEET_HEADER_ROWS, partial(luxembourg_row_to_entry, lengths=lengths)
    if fmt is RegistryFormat.SWITZERLAND:
        return SPREADSHEET_HEADER_ROWS, partial(switzerland_row_to_entry, lengths=lengths)
    if fmt is RegistryFormat.LIECHTENSTEIN:
        return LIECHTENSTEIN_HEADER_ROWS, partial(liechtenstein_row_to_entry, lengths=lengths)
    raise ValueError(f'Not a spreadsheet format: {fmt}')


def _ingest_rows(
    fmt: RegistryFormat,
    path: Union[str, Path],
    lengths: Mapping[str, int],
) -> Iterator[IngestResult]:
    header_rows, parse = _spreadsheet_layout(fmt, lengths)

    try:
        rows = read_sheet_rows(path)
    except RegistryReadError:
        if fmt is RegistryFormat.LIECHTENSTEIN:
            yield ABSENT
            return
        raise

    for number, row in enumerate(rows[header_rows:], start=header_rows + 1):
        if _is_blank(row):
            continue
        parsed = _with_position(parse, row, number)
        if isinstance(parsed, list):
            if parsed:
                yield Entries(tuple(parsed))
        else:
            yield Entry(parsed)


def ingest_file(
    fmt: RegistryFormat,
    path: Union[str, Path],
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> Iterator[IngestResult]:
    """
    Stream the bank entries of a registry file.

    Results are produced lazily; the file is only opened once the first
    result is requested.
    """
    fmt = RegistryFormat(fmt)
    if fmt in LINE_FORMATS:
        return _ingest_lines(fmt, path, lengths)
    return _ingest_rows(fmt, path, lengths)


def iter_entries(results: Iterable[IngestResult]) -> Iterator[BankEntry]:
    """Flatten an ingestion stream into bank entries, dropping ABSENT."""
    for result in results:
        if isinstance(result, Entry):
            yield result.entry
        elif isinstance(result, Entries):
            yield from result.entries
