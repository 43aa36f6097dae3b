"""
Fastighetsbeteckning Validation

The acceptance gate applied before any data lookup, plus helpers for
input hinting. Only validate_fastighetsbeteckning decides whether a
search may proceed; the strict format check is a hint, never a gate.
"""

from __future__ import annotations

import re
from typing import Any, Final


# =============================================================================
# Patterns
# =============================================================================

MIN_LENGTH: Final[int] = 3
DEFAULT_MUNICIPALITY: Final[str] = "Stockholm"

# At least one letter, Swedish characters included
LETTER_PATTERN = re.compile(r"[a-zåäö]", re.IGNORECASE)

# <Block>:<Unit> anywhere in the string
BLOCK_UNIT_PATTERN = re.compile(r"[0-9]+:[0-9]+")

# <Uppercase word(s)> <Block>:<Unit>, anchored. Used for input hints only.
STRICT_PATTERN = re.compile(
    r"^[A-ZÅÄÖ][a-zåäöé]+(?:[ -][A-ZÅÄÖ][a-zåäöé]+)*\s+[0-9]+:[0-9]+$"
)

# Letter immediately followed by a digit, e.g. "Stockholm1:1"
LETTER_DIGIT_PATTERN = re.compile(r"([a-zåäö])([0-9])", re.IGNORECASE)


# =============================================================================
# Validation Functions
# =============================================================================


def validate_fastighetsbeteckning(value: Any) -> bool:
    """
    Permissive pre-check for a Swedish property designation.

    Accepts when the trimmed input is at least 3 characters long, contains
    a letter and contains a <digits>:<digits> token. Never raises.

    Args:
        value: Raw user input

    Returns:
        True if a search may proceed
    """
    if not isinstance(value, str):
        return False

    trimmed = value.strip()
    if len(trimmed) < MIN_LENGTH:
        return False

    has_letter = LETTER_PATTERN.search(trimmed) is not None
    has_block_unit = BLOCK_UNIT_PATTERN.search(trimmed) is not None

    return has_letter and has_block_unit


def matches_strict_format(value: Any) -> bool:
    """Check the canonical `<Name> <Block>:<Unit>` shape, for UI hinting."""
    if not isinstance(value, str):
        return False
    return STRICT_PATTERN.match(value.strip()) is not None


def format_input(value: str) -> str:
    """Insert a space between a letter and a directly following digit."""
    return LETTER_DIGIT_PATTERN.sub(r"\1 \2", value)


def extract_municipality(identifier: str) -> str:
    """
    Best-effort municipality name for display.

    Returns the words before the first <Block>:<Unit> token. Falls back to
    the first word, then to Stockholm.
    """
    trimmed = identifier.strip()
    match = BLOCK_UNIT_PATTERN.search(trimmed)
    if match:
        name = " ".join(trimmed[: match.start()].split())
        if name:
            return name

    parts = trimmed.split()
    return parts[0] if parts else DEFAULT_MUNICIPALITY
