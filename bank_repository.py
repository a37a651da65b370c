#!/usr/bin/env python3
"""
Bank data repositories for ibanbic.

Entries are keyed by (country code, bank code). Bank codes are compared as
exact strings: '001' and '1' are different keys.
"""

import json
import threading
from pathlib import Path
from typing import Iterable, Optional

from banks import BankEntry
from storage import read_json, save_json


class RepositoryError(Exception):
    """The bank data store could not be read or written."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


class BankDataRepository:
    """Interface of a bank data store."""

    def find(self, country_code: str, bank_code: str) -> Optional[BankEntry]:
        """Return the entry for (country_code, bank_code), None if unknown."""
        raise NotImplementedError

    def upsert(self, entry: BankEntry) -> None:
        """Insert or replace the entry stored under its country and bank code."""
        raise NotImplementedError

    def upsert_many(self, entries: Iterable[BankEntry]) -> int:
        """Upsert several entries. Returns the number stored."""
        count = 0
        for entry in entries:
            self.upsert(entry)
            count += 1
        return count

    def count(self, country_code: str = None) -> int:
        """Number of stored entries, optionally for one country."""
        raise NotImplementedError

    def flush(self) -> None:
        """Persist pending changes. No-op for stores without a backing file."""


class InMemoryRepository(BankDataRepository):
    """Thread-safe repository kept in a dict."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, str], BankEntry] = {}

    def find(self, country_code: str, bank_code: str) -> Optional[BankEntry]:
        with self._lock:
            return self._entries.get((country_code, bank_code))

    def upsert(self, entry: BankEntry) -> None:
        with self._lock:
            self._entries[(entry.country_code, entry.bank_code)] = entry

    def count(self, country_code: str = None) -> int:
        with self._lock:
            if country_code is None:
                return len(self._entries)
            return sum(1 for country, _ in self._entries if country == country_code)


class JsonFileRepository(BankDataRepository):
    """
    Repository backed by the JSON BIC database.

    File layout: {country_code: {bank_code: entry dict}}. The file is read
    on first access; upserts are kept in memory until flush().
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._data: Optional[dict] = None

    def _load(self) -> dict:
        if self._data is None:
            try:
                data = read_json(self.path, {})
            except (OSError, json.JSONDecodeError) as e:
                raise RepositoryError(f'Failed to load bank data from {self.path}: {e}', path=self.path) from e
            if not isinstance(data, dict):
                raise RepositoryError(f'Unexpected bank data layout in {self.path}', path=self.path)
            self._data = data
        return self._data

    def find(self, country_code: str, bank_code: str) -> Optional[BankEntry]:
        with self._lock:
            record = self._load().get(country_code, {}).get(bank_code)
        if record is None:
            return None
        return BankEntry.from_dict(record)

    def upsert(self, entry: BankEntry) -> None:
        with self._lock:
            country = self._load().setdefault(entry.country_code, {})
            country[entry.bank_code] = entry.to_dict()

    def count(self, country_code: str = None) -> int:
        with self._lock:
            data = self._load()
            if country_code is None:
                return sum(len(codes) for codes in data.values())
            return len(data.get(country_code, {}))

    def countries(self) -> list[str]:
        """Country codes present in the database."""
        with self._lock:
            return sorted(self._load())

    def flush(self) -> None:
        with self._lock:
            if self._data is None:
                return
            try:
                save_json(self.path, self._data)
            except OSError as e:
                raise RepositoryError(f'Failed to save bank data to {self.path}: {e}', path=self.path) from e
