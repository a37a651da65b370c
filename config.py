#!/usr/bin/env python3
"""Configuration loader for ibanbic. Paths can be overridden from environment variables."""

import os
from pathlib import Path


def get_env(key: str, default: str = None, required: bool = False) -> str:
    """Get environment variable with optional default."""
    value = os.environ.get(key, default)
    if required and not value:
        raise EnvironmentError(f'Required environment variable {key} not set')
    return value


# Paths
DATA_PATH = Path(get_env('IBANBIC_DATA_PATH', 'data'))
STORAGE_PATH = Path(get_env('IBANBIC_STORAGE_PATH', '.storage'))

# Storage files
BIC_DB_FILE = STORAGE_PATH / 'bic_db.json'

# Registry source files, as published by the national banks
AUSTRIA_FILE = DATA_PATH / 'austria.csv'
BUNDESBANK_FILE = DATA_PATH / 'bundesbank.txt'
BELGIUM_FILE = DATA_PATH / 'belgium.xlsx'
NETHERLANDS_FILE = DATA_PATH / 'netherlands.xlsx'
LUXEMBOURG_FILE = DATA_PATH / 'luxembourg.xlsx'
SWITZERLAND_FILE = DATA_PATH / 'switzerland.xlsx'
LIECHTENSTEIN_FILE = DATA_PATH / 'liechtenstein.xlsx'

# Text encodings of the line-oriented registries
AUSTRIA_ENCODING = 'cp1252'
BUNDESBANK_ENCODING = 'latin-1'

# Header lines/rows preceding the first data record
AUSTRIA_HEADER_LINES = 7
SPREADSHEET_HEADER_ROWS = 2
LIECHTENSTEIN_HEADER_ROWS = 1

# Fixed BIC for Commerzbank BLZs (xxx400xx)
COMMERZBANK_BIC = 'COBADEFFXXX'


def print_config() -> None:
    """Print configuration for verification."""
    print('ibanbic configuration')
    print('=' * 40)
    print(f'Data path:          {DATA_PATH}')
    print(f'Storage path:       {STORAGE_PATH}')
    print('=' * 40)
    print('Registry files:')
    for name, path in [
        ('Austria', AUSTRIA_FILE),
        ('Bundesbank', BUNDESBANK_FILE),
        ('Belgium', BELGIUM_FILE),
        ('Netherlands', NETHERLANDS_FILE),
        ('Luxembourg', LUXEMBOURG_FILE),
        ('Switzerland', SWITZERLAND_FILE),
        ('Liechtenstein', LIECHTENSTEIN_FILE),
        ('BIC database', BIC_DB_FILE),
    ]:
        exists = '✓' if path.exists() else '✗'
        print(f'  {exists} {name}: {path}')


if __name__ == '__main__':
    print_config()
