"""String helpers for names, slugs, and display ordering.

Pure functions, no infrastructure dependencies.
"""

from __future__ import annotations

import re
import unicodedata

# Acronym runs ("RPC" in "RPCMiddleware"), capitalized words, lowercase runs, digits.
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

# Root collation order for ASCII punctuation and symbols.
_PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

# Primary weight classes: whitespace < punctuation < other symbols < digits < letters.
_SPACE, _PUNCTUATION, _SYMBOL, _DIGIT, _LETTER = range(5)


def split_words(text: str) -> list[str]:
    """Split an identifier into words on case changes, digits, and separators."""
    return _WORD_PATTERN.findall(text)


def pascal_case(text: str) -> str:
    """``wallet_kit`` -> ``WalletKit``, ``lnd`` -> ``Lnd``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def snake_case(text: str) -> str:
    """``SendPaymentV2`` -> ``send_payment_v_2``."""
    return "_".join(word.lower() for word in split_words(text))


def _primary_weight(char: str) -> tuple[int, int]:
    if char.isspace():
        return _SPACE, ord(char)
    index = _PUNCTUATION_ORDER.find(char)
    if index >= 0:
        return _PUNCTUATION, index
    if char.isdigit():
        return _DIGIT, ord(char)
    if char.isalpha():
        return _LETTER, ord(char)
    return _SYMBOL, ord(char)


def locale_key(text: str) -> tuple[tuple[tuple[int, int], ...], str, str]:
    """Sort key approximating locale-aware collation.

    Three levels, compared in order:

    1. Base characters, case-insensitive with accents folded. Whitespace
       sorts before punctuation, punctuation before digits, digits before
       letters (``chan_x`` < ``chan-x`` < ``chan1`` < ``channels``).
    2. Accents (``e`` < ``é``).
    3. Case, lowercase first (``a`` < ``A`` < ``b``).
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    primary = tuple(_primary_weight(c) for c in base)
    return primary, decomposed.casefold(), text.swapcase()
