"""Shared pytest fixtures for registry ingestion and BIC resolution tests.

Provides:
- data_dir: directory with the literal line-oriented registry fixtures
- registry_dir: session temp directory with spreadsheet registries built
  from the *_ROWS tables below
- loaded_repo: InMemoryRepository holding the Bundesbank and Belgium fixtures
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from zipfile import ZipFile

import pytest
from openpyxl import Workbook

from bank_repository import InMemoryRepository
from loader import load_registry
from registry_parsers import RegistryFormat

DATA_DIR = Path(__file__).parent / 'data'


# ── Spreadsheet registries ─────────────────────────────────────────────────
#
# Each table starts with its header rows: two for most registries, one for
# Liechtenstein.

BELGIUM_ROWS = [
    ['Lijst van de identificatienummers van de Belgische banken', None, None, None, None, None, None],
    ['T_Identification_Number_From', 'T_Identification_Number_To', 'Biccode',
     'T_Institutions_Dutch', 'T_Institutions_French', 'T_Institutions_German', 'T_Institutions_English'],
    ['000', '049', 'BPOT BE B1', 'bpost bank', 'bpost banque', 'bpost bank', 'bpost bank'],
    ['050', '099', 'GKCCBEBB', 'Belfius Bank', 'Belfius Banque', 'Belfius Bank', 'Belfius Bank'],
    ['100', '100', 'NBBEBEBB203', 'Nationale Bank van België', 'Banque Nationale de Belgique',
     'Belgische Nationalbank', 'National Bank of Belgium'],
    ['101', '101', 'NAV', '-', '-', '-', '-'],
    ['102', '109', 'VRIJ', 'VRIJ - LIBRE', 'VRIJ - LIBRE', None, None],
    [200, 214, 'GEBABEBB', 'BNP Paribas Fortis', 'BNP Paribas Fortis', None, None],
]

NETHERLANDS_ROWS = [
    ['BIC-lijst Nederlandse betaaldienstverleners', None, None],
    ['BIC', 'Identifier', 'Naam betaaldienstverlener'],
    ['ABNANL2A', 'ABNA', 'ABN AMRO BANK N.V'],
    ['INGBNL2A', 'INGB', 'ING BANK N.V.'],
    ['RABONL2U', 'RABO', 'RABOBANK'],
]

LUXEMBOURG_ROWS = [
    ['Luxembourg IBAN bank codes', None, None],
    ['Institution', 'IBAN code', 'BIC'],
    ["Banque et Caisse d'Epargne de l'Etat", '001', 'BCEELULL'],
    ['BGL BNP Paribas', 3, 'BGLLLULL'],
]

SWITZERLAND_HEADER = [
    'Gruppe', 'IID', 'Filial-ID', 'Neue IID', 'SIC-IID', 'Hauptsitz', 'IID-Art', 'gültig ab',
    'SIC', 'euroSIC', 'Sprache', 'Kurzbez.', 'Bank/Institut', 'Domizil', 'Postadresse',
    'PLZ', 'Ort', 'Telefon', 'Fax', 'Vorwahl', 'Landcode', 'Postkonto', 'SWIFT',
]

SWITZERLAND_ROWS = [
    ['Bankenstamm SIX Interbank Clearing'] + [None] * 22,
    SWITZERLAND_HEADER,
    ['01', 100, '0000', None, '001008', 100, 1, '20090807', 1, 1, 1, 'SNB',
     'Schweizerische Nationalbank', 'Börsenstrasse 15', 'Postfach 2800', '3003', 'Bern',
     '058 631 00 00', None, None, 'CH', '30-5-5', 'SNBZCHZZXXX'],
    ['02', 230, '0000', None, '002303', 230, 1, '20140530', 1, 1, 1, 'UBS',
     'UBS Switzerland AG', 'Bahnhofstrasse 45', None, '8098', 'Zürich',
     '044 234 11 11', None, None, 'CH', '80-2-2', 'UBSW CHZH 80A'],
]

LIECHTENSTEIN_ROWS = [
    ['BC-Nr', 'Bankname', 'PLZ', 'Ort', 'BIC'],
    [8810, 'Bank Alpinum AG', '9490', 'Vaduz', 'BALPLI22'],
    ['08800', 'LGT Bank AG', '9490', 'Vaduz', 'BLFLLI2X'],
]


def write_workbook(path: Path, rows: list[list[Any]]) -> Path:
    """Write rows into the first sheet of a new workbook."""
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    workbook.save(path)
    return path


def break_sheet_xml(path: Path) -> Path:
    """Truncate the first worksheet XML of a saved workbook, leaving the zip valid."""
    with ZipFile(path) as archive:
        members = {name: archive.read(name) for name in archive.namelist()}
    members['xl/worksheets/sheet1.xml'] = b'<worksheet><sheetData><row><c'
    with ZipFile(path, 'w') as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return path


@pytest.fixture(scope='session')
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture(scope='session')
def registry_dir(tmp_path_factory) -> Path:
    """Directory holding one xlsx file per spreadsheet registry."""
    directory = tmp_path_factory.mktemp('registries')
    write_workbook(directory / 'belgium.xlsx', BELGIUM_ROWS)
    write_workbook(directory / 'netherlands.xlsx', NETHERLANDS_ROWS)
    write_workbook(directory / 'luxembourg.xlsx', LUXEMBOURG_ROWS)
    write_workbook(directory / 'switzerland.xlsx', SWITZERLAND_ROWS)
    write_workbook(directory / 'liechtenstein.xlsx', LIECHTENSTEIN_ROWS)
    (directory / 'broken.xlsx').write_bytes(b'this is not a workbook')
    break_sheet_xml(write_workbook(directory / 'broken_sheet.xlsx', NETHERLANDS_ROWS))
    return directory


@pytest.fixture(scope='session')
def loaded_repo(data_dir: Path, registry_dir: Path) -> InMemoryRepository:
    repo = InMemoryRepository()
    load_registry(RegistryFormat.BUNDESBANK, data_dir / 'bundesbank.txt', repo)
    load_registry(RegistryFormat.BELGIUM, registry_dir / 'belgium.xlsx', repo)
    return repo
