#!/usr/bin/env python3
"""Load national bank registry files into the BIC database."""

import argparse
import sys
from pathlib import Path

from bank_repository import JsonFileRepository, RepositoryError
from config import BIC_DB_FILE
from loader import DEFAULT_REGISTRY_PATHS, default_path, load_registry
from registry_parsers import RegistryError, RegistryFormat


def show_stats(repo: JsonFileRepository) -> None:
    """Show statistics about current BIC database."""
    if not repo.path.exists():
        print('BIC database does not exist')
        return

    print(f'BIC database: {repo.path}')
    print(f'Total entries: {repo.count():,}')
    for country in repo.countries():
        print(f'  {country}: {repo.count(country):,}')


def load(fmt: RegistryFormat, path: Path, repo: JsonFileRepository) -> int:
    """Load one registry file, printing progress."""
    print(f'Reading {fmt.value} registry from: {path}')
    count = load_registry(fmt, path, repo)
    print(f'Stored {count:,} banks')
    return count


def main():
    parser = argparse.ArgumentParser(
        description='Update BIC database from national bank registries'
    )
    parser.add_argument(
        '--format',
        choices=[fmt.value for fmt in RegistryFormat],
        help='Registry format to load (default: all)'
    )
    parser.add_argument(
        '--from-file',
        type=Path,
        help='Read from this file instead of the default location (requires --format)'
    )
    parser.add_argument(
        '--db',
        type=Path,
        default=BIC_DB_FILE,
        help='BIC database file'
    )
    parser.add_argument(
        '--stats',
        action='store_true',
        help='Show statistics about current database'
    )
    args = parser.parse_args()

    if args.from_file and not args.format:
        parser.error('--from-file requires --format')

    print('update_bic_db.py')
    print('=' * 40)

    repo = JsonFileRepository(args.db)

    try:
        if args.stats:
            show_stats(repo)
            return

        if args.format:
            fmt = RegistryFormat(args.format)
            sources = [(fmt, args.from_file or default_path(fmt))]
        else:
            sources = list(DEFAULT_REGISTRY_PATHS.items())

        total = 0
        for fmt, path in sources:
            total += load(fmt, path, repo)

        print('=' * 40)
        print(f'Success: {total:,} banks loaded, {repo.count():,} in database')

    except RegistryError as e:
        print(f'Registry error: {e}', file=sys.stderr)
        sys.exit(1)
    except RepositoryError as e:
        print(f'Database error: {e}', file=sys.stderr)
        sys.exit(1)
    except (IOError, OSError) as e:
        print(f'File error: {e}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
