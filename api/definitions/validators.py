"""
Input checks for dictionary entries.
"""

from __future__ import annotations

import re
from typing import Any

# ASCII letters only; fullmatch so a trailing newline is rejected too.
WORD_PATTERN = re.compile(r"[A-Za-z]+")


def is_valid_word(value: Any) -> bool:
    return isinstance(value, str) and WORD_PATTERN.fullmatch(value) is not None


def is_valid_definition(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0
