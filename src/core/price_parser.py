# src/core/price_parser.py

"""Turn Steam's currency-formatted price strings into floats."""

import math
import re
import unicodedata

# Longest leading decimal literal, "." as the decimal point.
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _strip_letters_and_spaces(text: str) -> str:
    return "".join(
        ch for ch in text if not (ch.isspace() or ch.isalpha())
    )


def _skip_currency_symbols(text: str) -> str:
    index = 0
    while index < len(text) and unicodedata.category(text[index]) == "Sc":
        index += 1
    return text[index:]


def parse_price(text: str | None) -> float:
    """Extract a price from text such as ``'Rp 1.234'`` or ``'$0.03'``.

    Whitespace and letters are removed, leading currency symbols are
    skipped, and the longest leading number is read with ``.`` as the
    decimal point. Trailing characters (e.g. ``',56'`` or ``'€'``) end
    the number. Returns ``nan`` instead of raising when nothing numeric
    remains.
    """
    if not text:
        return math.nan
    residual = _skip_currency_symbols(_strip_letters_and_spaces(text))
    match = _LEADING_NUMBER.match(residual)
    if match is None:
        return math.nan
    return float(match.group())
