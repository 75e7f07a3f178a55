"""OCC options ticker codec.

Canonical format::

    O:<UNDERLYING><YYMMDD><C|P><STRIKE*1000, 8 digits zero-padded>

    O:UBER220121C00050000  -> UBER, 2022-01-21, call, 50.000
    O:F211119P00014000     -> F,    2021-11-19, put,  14.000
    O:SPY251219C00650500   -> SPY,  2025-12-19, call, 650.500

The underlying has no fixed width (1-6 letters), so decode takes the maximal
leading run of non-digit characters as the underlying; the first digit
starts the date.

Pure functions, no I/O, safe to call from any thread.
"""

import re
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from ..models.option_ticker import (
    MAX_SCALED_STRIKE,
    MAX_UNDERLYING_LENGTH,
    STRIKE_SCALE,
    OptionTicker,
    OptionType,
)
from ..utils.error_handling import (
    BadSuffixLengthError,
    FormatError,
    InvalidDateError,
    InvalidUnderlyingError,
    MalformedSuffixError,
    MissingPrefixError,
    NegativeOrOversizedStrikeError,
    TooShortError,
    UnderlyingNotFoundError,
)

OCC_PREFIX = "O:"
DATE_LENGTH = 6
STRIKE_LENGTH = 8
SUFFIX_LENGTH = DATE_LENGTH + 1 + STRIKE_LENGTH  # YYMMDD + C/P + strike
MIN_BODY_LENGTH = SUFFIX_LENGTH + 1

_DIGITS = "0123456789"
_DATE_PATTERN = re.compile(r"[0-9]{%d}" % DATE_LENGTH)
_STRIKE_PATTERN = re.compile(r"[0-9]{%d}" % STRIKE_LENGTH)
_LETTERS_PATTERN = re.compile(r"[A-Za-z]+")


def encode(ticker: OptionTicker) -> str:
    """Format an OptionTicker as its canonical OCC string.

    Args:
        ticker: Ticker to encode

    Returns:
        Canonical string, e.g. "O:UBER220121C00050000"

    Raises:
        NegativeOrOversizedStrikeError: If strike * 1000 needs more than 8 digits
    """
    underlying = ticker.underlying.upper()
    expiration = ticker.expiration_date
    date_part = f"{expiration.year % 100:02d}{expiration.month:02d}{expiration.day:02d}"

    scaled = (Decimal(ticker.strike) * STRIKE_SCALE).to_integral_value(rounding=ROUND_HALF_UP)
    if scaled < 0 or scaled > MAX_SCALED_STRIKE:
        raise NegativeOrOversizedStrikeError(
            f"Strike price {ticker.strike} does not fit in {STRIKE_LENGTH} digits "
            f"once scaled by {STRIKE_SCALE}"
        )

    return f"{OCC_PREFIX}{underlying}{date_part}{ticker.option_type.code}{int(scaled):08d}"


def strip_prefix(text: Optional[str]) -> str:
    """Remove the 'O:' prefix (any case), raising MissingPrefixError if absent."""
    if not isinstance(text, str) or text[:len(OCC_PREFIX)].upper() != OCC_PREFIX:
        raise MissingPrefixError(
            f"The ticker {text!r} is not in OCC format: expected it to start with "
            f"'{OCC_PREFIX}' (e.g. O:UBER220121C00050000)"
        )
    return text[len(OCC_PREFIX):]


def split_body(body: str) -> Tuple[str, str]:
    """Split a prefix-less OCC body into (underlying, suffix).

    The underlying is the maximal leading run of non-digit characters and
    must be 1-6 ASCII letters; the suffix must be exactly 15 characters.
    """
    if len(body) < MIN_BODY_LENGTH:
        raise TooShortError(
            f"OCC ticker body {body!r} is {len(body)} characters; "
            f"at least {MIN_BODY_LENGTH} are required"
        )

    boundary = 0
    while boundary < len(body) and body[boundary] not in _DIGITS:
        boundary += 1

    if boundary == 0 or boundary > MAX_UNDERLYING_LENGTH:
        raise UnderlyingNotFoundError(
            f"No underlying of 1-{MAX_UNDERLYING_LENGTH} characters found before "
            f"the expiration date in {body!r}"
        )

    underlying, suffix = body[:boundary], body[boundary:]
    if not _LETTERS_PATTERN.fullmatch(underlying):
        raise InvalidUnderlyingError(
            f"Underlying {underlying!r} must contain only letters"
        )
    if len(suffix) != SUFFIX_LENGTH:
        raise BadSuffixLengthError(
            f"Expected {SUFFIX_LENGTH} characters after the underlying "
            f"(YYMMDD + C/P + 8-digit strike), got {len(suffix)} in {suffix!r}"
        )
    return underlying.upper(), suffix


def _parse_expiration(digits: str) -> date:
    if not _DATE_PATTERN.fullmatch(digits):
        raise InvalidDateError(f"Expiration {digits!r} must be six digits (YYMMDD)")
    year = 2000 + int(digits[0:2])
    month = int(digits[2:4])
    day = int(digits[4:6])
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"Expiration {digits!r} is not a valid date: {e}") from e


def decode(text: Optional[str]) -> OptionTicker:
    """Parse an OCC string into an OptionTicker.

    The prefix, the underlying letters and the type character are accepted
    in any case.

    Args:
        text: OCC ticker string, e.g. "O:UBER220121C00050000"

    Returns:
        Decoded OptionTicker

    Raises:
        FormatError: One of its subclasses, naming the first problem found
    """
    body = strip_prefix(text)
    underlying, suffix = split_body(body)

    date_digits = suffix[:DATE_LENGTH]
    type_char = suffix[DATE_LENGTH]
    strike_digits = suffix[DATE_LENGTH + 1:]

    expiration = _parse_expiration(date_digits)
    option_type = OptionType.from_code(type_char)
    if not _STRIKE_PATTERN.fullmatch(strike_digits):
        raise MalformedSuffixError(
            f"Strike {strike_digits!r} must be {STRIKE_LENGTH} digits"
        )
    strike = Decimal(int(strike_digits)) / STRIKE_SCALE

    return OptionTicker(underlying, expiration, option_type, strike)


def try_decode(text: Optional[str]) -> Optional[OptionTicker]:
    """Like decode(), but returns None for malformed input."""
    try:
        return decode(text)
    except FormatError:
        return None


def is_valid(text: Optional[str]) -> bool:
    """True if text decodes to an OptionTicker."""
    return try_decode(text) is not None


def create(underlying: str, expiration_date: date, option_type: OptionType, strike) -> str:
    """Encode raw components; shorthand for OptionTicker.create()."""
    return encode(OptionTicker(underlying, expiration_date, option_type, strike))
