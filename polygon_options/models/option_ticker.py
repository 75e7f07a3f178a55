"""OCC options ticker value type."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Union

from ..utils.error_handling import (
    InvalidDateError,
    InvalidTypeError,
    InvalidUnderlyingError,
    NegativeOrOversizedStrikeError,
)

StrikeLike = Union[Decimal, int, float, str]

MAX_UNDERLYING_LENGTH = 6
STRIKE_SCALE = 1000
MAX_SCALED_STRIKE = 99_999_999
MIN_EXPIRATION_YEAR = 2000
MAX_EXPIRATION_YEAR = 2099

_STRIKE_QUANTUM = Decimal("0.001")
_MAX_STRIKE = Decimal(MAX_SCALED_STRIKE) / STRIKE_SCALE
_UNDERLYING_PATTERN = re.compile(r"[A-Za-z]{1,%d}" % MAX_UNDERLYING_LENGTH)


class OptionType(str, Enum):
    """Call or put. The value is the API's contract_type string."""

    CALL = "call"
    PUT = "put"

    @property
    def code(self) -> str:
        """Single-character OCC code ('C' or 'P')."""
        return "C" if self is OptionType.CALL else "P"

    @classmethod
    def from_code(cls, code: str) -> "OptionType":
        """Parse an OCC type character, case-insensitive."""
        normalized = code.upper() if isinstance(code, str) else code
        if normalized == "C":
            return cls.CALL
        if normalized == "P":
            return cls.PUT
        raise InvalidTypeError(f"Option type must be 'C' or 'P', got {code!r}")


def normalize_strike(value: StrikeLike) -> Decimal:
    """Convert a strike to a Decimal with three fractional digits.

    Rounds half away from zero. Raises NegativeOrOversizedStrikeError for
    negative, non-finite, unparseable, or > 99999.999 values.
    """
    if isinstance(value, bool):
        raise NegativeOrOversizedStrikeError(f"Strike price must be a number, got {value!r}")
    try:
        strike = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise NegativeOrOversizedStrikeError(f"Strike price must be a number, got {value!r}")

    if not strike.is_finite():
        raise NegativeOrOversizedStrikeError(f"Strike price must be finite, got {value!r}")
    if strike < 0:
        raise NegativeOrOversizedStrikeError(f"Strike price cannot be negative, got {value!r}")
    if strike > _MAX_STRIKE + _STRIKE_QUANTUM:
        raise NegativeOrOversizedStrikeError(
            f"Strike price {value!r} does not fit in 8 digits once scaled by {STRIKE_SCALE}"
        )

    strike = strike.quantize(_STRIKE_QUANTUM, rounding=ROUND_HALF_UP)
    if strike > _MAX_STRIKE:
        raise NegativeOrOversizedStrikeError(
            f"Strike price {value!r} does not fit in 8 digits once scaled by {STRIKE_SCALE}"
        )
    return strike


def normalize_underlying(value: Optional[str]) -> str:
    """Validate and uppercase an underlying symbol (1-6 ASCII letters)."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidUnderlyingError("Underlying ticker symbol cannot be empty.")
    if not _UNDERLYING_PATTERN.fullmatch(value):
        raise InvalidUnderlyingError(
            f"Underlying ticker symbol must be 1-{MAX_UNDERLYING_LENGTH} letters, got {value!r}"
        )
    return value.upper()


def normalize_expiration(value: Union[date, datetime]) -> date:
    """Reduce a date/datetime to a plain date in the encodable year range."""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise InvalidDateError(f"Expiration must be a date, got {value!r}")
    if not MIN_EXPIRATION_YEAR <= value.year <= MAX_EXPIRATION_YEAR:
        raise InvalidDateError(
            f"Expiration year {value.year} is outside "
            f"{MIN_EXPIRATION_YEAR}-{MAX_EXPIRATION_YEAR}"
        )
    return value


@dataclass(frozen=True)
class OptionTicker:
    """A single options contract identified by its OCC components.

    Immutable; all invariants are checked on construction:
    underlying is 1-6 letters (stored uppercase), expiration falls in
    2000-2099, strike is 0..99999.999 with at most three decimals.

    The canonical string form is str(ticker), e.g. O:UBER220121C00050000.
    """

    underlying: str
    expiration_date: date
    option_type: OptionType
    strike: Decimal

    def __post_init__(self):
        if not isinstance(self.option_type, OptionType):
            raise TypeError(f"option_type must be an OptionType, got {self.option_type!r}")
        object.__setattr__(self, "underlying", normalize_underlying(self.underlying))
        object.__setattr__(self, "expiration_date", normalize_expiration(self.expiration_date))
        object.__setattr__(self, "strike", normalize_strike(self.strike))

    @property
    def contract(self) -> str:
        """Canonical string without the 'O:' prefix (snapshot path segment)."""
        return str(self)[2:]

    @property
    def is_call(self) -> bool:
        return self.option_type is OptionType.CALL

    @classmethod
    def create(
        cls,
        underlying: str,
        expiration_date: Union[date, datetime],
        option_type: OptionType,
        strike: StrikeLike,
    ) -> str:
        """Build a ticker from components and return its canonical string.

        Example:
            >>> OptionTicker.create("UBER", date(2022, 1, 21), OptionType.CALL, 50)
            'O:UBER220121C00050000'
        """
        return str(cls(underlying, expiration_date, option_type, strike))

    @classmethod
    def parse(cls, text: str) -> "OptionTicker":
        """Decode a canonical string; raises a FormatError subclass."""
        from ..occ.codec import decode
        return decode(text)

    @classmethod
    def try_parse(cls, text: Optional[str]) -> Optional["OptionTicker"]:
        """Decode a canonical string, returning None instead of raising."""
        from ..occ.codec import try_decode
        return try_decode(text)

    def __str__(self) -> str:
        from ..occ.codec import encode
        return encode(self)

    def __repr__(self) -> str:
        return (f"OptionTicker({self.underlying} {self.expiration_date.isoformat()} "
                f"{self.option_type.code} {self.strike})")
