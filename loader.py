#!/usr/bin/env python3
"""Loads registry files into a bank data repository."""

from pathlib import Path
from typing import Mapping, Union

from bank_repository import BankDataRepository
from banks import COUNTRY_CODE_TO_BANK_CODE_LENGTH
from config import (
    AUSTRIA_FILE, BUNDESBANK_FILE, BELGIUM_FILE, NETHERLANDS_FILE,
    LUXEMBOURG_FILE, SWITZERLAND_FILE, LIECHTENSTEIN_FILE,
)
from ingest import ingest_file, iter_entries
from registry_parsers import RegistryFormat

DEFAULT_REGISTRY_PATHS: dict[RegistryFormat, Path] = {
    RegistryFormat.AUSTRIA: AUSTRIA_FILE,
    RegistryFormat.BUNDESBANK: BUNDESBANK_FILE,
    RegistryFormat.BELGIUM: BELGIUM_FILE,
    RegistryFormat.NETHERLANDS: NETHERLANDS_FILE,
    RegistryFormat.LUXEMBOURG: LUXEMBOURG_FILE,
    RegistryFormat.SWITZERLAND: SWITZERLAND_FILE,
    RegistryFormat.LIECHTENSTEIN: LIECHTENSTEIN_FILE,
}


def default_path(fmt: RegistryFormat) -> Path:
    """Default location of the registry file for fmt."""
    return DEFAULT_REGISTRY_PATHS[RegistryFormat(fmt)]


def load_registry(
    fmt: RegistryFormat,
    path: Union[str, Path],
    repo: BankDataRepository,
    lengths: Mapping[str, int] = COUNTRY_CODE_TO_BANK_CODE_LENGTH,
) -> int:
    """
    Parse a registry file and upsert its entries into repo.

    Branch records (Bundesbank Merkmal 2) are skipped so that a bank code
    always resolves to the main office. Returns the number of entries stored.
    """
    entries = (e for e in iter_entries(ingest_file(fmt, path, lengths)) if e.primary)
    count = repo.upsert_many(entries)
    repo.flush()
    return count
