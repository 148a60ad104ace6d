"""
Helper utilities for modelSelector.

This module contains various helper functions and utilities.
"""

from typing import Any, Iterable, List, Union
import re
from pathlib import Path
import joblib


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure directory exists, create if it doesn't."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def save_object(obj: Any, path: Union[str, Path]) -> None:
    """Save object to file using joblib."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(obj, path)


def load_object(path: Union[str, Path]) -> Any:
    """Load object from file using joblib."""
    return joblib.load(path)


def to_snake_case(name: str) -> str:
    """'Green Lvs' / 'greenLvs' / 'green.lvs' -> 'green_lvs'."""
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', str(name).strip())
    name = re.sub(r'[^0-9a-zA-Z]+', '_', name)
    return name.strip('_').lower()


def clean_column_names(columns: Iterable[str]) -> List[str]:
    """Snake-case column names, suffixing duplicates with _2, _3, ..."""
    cleaned = []
    seen = {}
    for column in columns:
        name = to_snake_case(column) or 'x'
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 1
        cleaned.append(name)
    return cleaned


def format_time(seconds: float) -> str:
    """Format time in seconds to human readable format."""
    if seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.2f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.2f}h"
