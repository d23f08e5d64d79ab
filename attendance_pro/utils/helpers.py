"""
Helper Utilities Module.

Small generic functions shared by the calculator, the clarification
tracker and the exporters.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - today_iso: Current date as YYYY-MM-DD
    - now_millis: Current instant in epoch milliseconds
    - generate_id: Short random identifiers
    - format_number: Render numbers without a trailing ".0"
"""

import random
import string
import time
from datetime import date
from pathlib import Path
from typing import Union

_ID_ALPHABET = string.ascii_lowercase + string.digits


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/exports")
        PosixPath('outputs/exports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def today_iso() -> str:
    """Return today's date as YYYY-MM-DD."""
    return date.today().isoformat()


def now_millis() -> int:
    """Return the current instant in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id(length: int = 9) -> str:
    """
    Generate a short random lowercase alphanumeric identifier.

    Args:
        length: Number of characters.

    Returns:
        Random identifier, e.g. "k3f9x0a2q".
    """
    return ''.join(random.choices(_ID_ALPHABET, k=length))


def format_number(value: float) -> str:
    """
    Render a number the way a spreadsheet cell shows it.

    Integral floats lose their fractional part, everything else keeps
    Python's shortest repr.

    Example:
        >>> format_number(800.0)
        "800"
        >>> format_number(0.5)
        "0.5"
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
