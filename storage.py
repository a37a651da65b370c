#!/usr/bin/env python3
"""Storage utilities for ibanbic. All JSON file operations."""

import json
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any


def read_json(path: Path, default: Any = None) -> Any:
    """
    Load JSON file, return default if not found.

    Invalid content is not hidden: json.JSONDecodeError and OSError
    propagate to the caller.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        return default if default is not None else {}


def save_json(path: Path, data: Any) -> None:
    """Save data to JSON file atomically."""
    path.parent.mkdir(parents=True, exist_ok=True)

    with NamedTemporaryFile(
        mode='w',
        suffix='.json',
        dir=path.parent,
        delete=False,
        encoding='utf-8'
    ) as tmp:
        json.dump(data, tmp, indent=2, ensure_ascii=False)
        tmp_path = tmp.name

    os.replace(tmp_path, path)
