"""Split a full option symbol into underlying + contract suffix.

The options snapshot endpoint takes the underlying and the contract as two
path segments, so callers holding one symbol need to find where the
underlying ends.
"""

from typing import Optional, Tuple

from ..models.option_ticker import MAX_UNDERLYING_LENGTH
from .codec import OCC_PREFIX, SUFFIX_LENGTH, decode

_TYPE_CODES = "CPcp"


def split_option_symbol(text: str) -> Tuple[str, str]:
    """Strictly split an OCC symbol into (underlying, contract).

    The contract is the symbol without its 'O:' prefix, which is what the
    snapshot endpoint expects.

    Raises:
        FormatError: If the symbol does not decode
    """
    ticker = decode(text)
    return ticker.underlying, ticker.contract


def best_effort_split(text: Optional[str]) -> Tuple[Optional[str], str]:
    """Split a symbol without failing.

    Tries underlying lengths 1..6 and accepts the first one whose remainder
    starts with six digits followed by C or P. When nothing matches, returns
    (None, symbol-without-prefix) so the caller can still use the text as an
    opaque contract.

    Example:
        >>> best_effort_split("O:SPY251219C00650000")
        ('SPY', '251219C00650000')
        >>> best_effort_split("garbage")
        (None, 'garbage')
        >>> best_effort_split(None)
        (None, '')
    """
    if not isinstance(text, str):
        return None, ""
    if text[:len(OCC_PREFIX)].upper() == OCC_PREFIX:
        clean = text[len(OCC_PREFIX):]
    else:
        clean = text

    if len(clean) < SUFFIX_LENGTH:
        return None, clean

    for length in range(1, min(MAX_UNDERLYING_LENGTH, len(clean) - SUFFIX_LENGTH + 1) + 1):
        remaining = clean[length:]
        if (len(remaining) >= SUFFIX_LENGTH
                and remaining[:6].isascii() and remaining[:6].isdigit()
                and remaining[6] in _TYPE_CODES):
            return clean[:length], remaining

    return None, clean
