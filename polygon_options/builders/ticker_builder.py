"""Incremental builder for OCC options tickers.

Collects the four ticker components in any order and validates them only when
build() or build_ticker() is called:

    >>> (OptionsTickerBuilder()
    ...     .with_underlying("SPY")
    ...     .with_expiration(2025, 12, 19)
    ...     .as_call()
    ...     .with_strike(650.5)
    ...     .build())
    'O:SPY251219C00650500'

A builder belongs to one caller at a time; it is not thread-safe.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ..models.option_ticker import OptionTicker, OptionType, StrikeLike
from ..occ.codec import OCC_PREFIX, encode, try_decode
from ..utils.error_handling import (
    IncompleteBuilderError,
    InvalidDateError,
    InvalidTypeError,
    InvalidUnderlyingError,
    NegativeOrOversizedStrikeError,
)


class OptionsTickerBuilder:
    """Mutable, chainable accumulator for ticker components."""

    def __init__(self):
        self._underlying: Optional[str] = None
        self._expiration_date: Optional[date] = None
        self._option_type: Optional[OptionType] = None
        self._strike: Optional[Decimal] = None

    @classmethod
    def from_ticker(cls, text: str) -> "OptionsTickerBuilder":
        """Create a builder pre-seeded from a full or partial ticker string.

        A full OCC symbol seeds all four fields. A bare root such as "SPY" or
        "O:SPY" seeds only the underlying.

        Raises:
            InvalidUnderlyingError: If text is neither a decodable symbol nor a letters-only root
        """
        builder = cls()
        ticker = try_decode(text)
        if ticker is not None:
            builder._underlying = ticker.underlying
            builder._expiration_date = ticker.expiration_date
            builder._option_type = ticker.option_type
            builder._strike = ticker.strike
            return builder

        root = text
        if isinstance(text, str) and text[:len(OCC_PREFIX)].upper() == OCC_PREFIX:
            root = text[len(OCC_PREFIX):]
        if not isinstance(root, str) or not root.strip().isalpha() or not root.strip().isascii():
            raise InvalidUnderlyingError(
                f"{text!r} is neither an OCC ticker nor an underlying symbol"
            )
        return builder.with_underlying(root)

    def with_underlying(self, underlying: str) -> "OptionsTickerBuilder":
        """Set the underlying symbol; letters/length are checked at build time."""
        if not isinstance(underlying, str) or not underlying.strip():
            raise InvalidUnderlyingError("Underlying ticker symbol cannot be null or empty.")
        self._underlying = underlying.strip().upper()
        return self

    def with_expiration(
        self,
        expiration: Union[date, datetime, str, int],
        month: Optional[int] = None,
        day: Optional[int] = None,
    ) -> "OptionsTickerBuilder":
        """Set the expiration from a date, an ISO "YYYY-MM-DD" string, or (year, month, day).

        Raises:
            InvalidDateError: If the string or (year, month, day) is not a real date
        """
        if month is None and day is None:
            if isinstance(expiration, str):
                try:
                    expiration = date.fromisoformat(expiration.strip())
                except ValueError as e:
                    raise InvalidDateError(f"Invalid expiration {expiration!r}: {e}") from e
            if isinstance(expiration, datetime):
                expiration = expiration.date()
            if not isinstance(expiration, date):
                raise InvalidDateError(f"Expiration must be a date, got {expiration!r}")
            self._expiration_date = expiration
            return self

        if month is None or day is None:
            raise InvalidDateError("with_expiration needs a date or all of year, month and day")
        try:
            self._expiration_date = date(expiration, month, day)
        except (TypeError, ValueError) as e:
            raise InvalidDateError(
                f"Invalid expiration {expiration}-{month}-{day}: {e}"
            ) from e
        return self

    def as_call(self) -> "OptionsTickerBuilder":
        self._option_type = OptionType.CALL
        return self

    def as_put(self) -> "OptionsTickerBuilder":
        self._option_type = OptionType.PUT
        return self

    def with_type(self, option_type: OptionType) -> "OptionsTickerBuilder":
        try:
            self._option_type = OptionType(option_type)
        except ValueError:
            raise InvalidTypeError(f"Option type must be 'call' or 'put', got {option_type!r}")
        return self

    def with_strike(self, strike: StrikeLike) -> "OptionsTickerBuilder":
        """Set the strike price.

        Raises:
            NegativeOrOversizedStrikeError: If the strike is negative or not a number
        """
        if isinstance(strike, bool):
            raise NegativeOrOversizedStrikeError(f"Strike price must be a number, got {strike!r}")
        try:
            value = strike if isinstance(strike, Decimal) else Decimal(str(strike))
        except ArithmeticError:
            raise NegativeOrOversizedStrikeError(f"Strike price must be a number, got {strike!r}")
        if value.is_nan() or value < 0:
            raise NegativeOrOversizedStrikeError(f"Strike price cannot be negative, got {strike!r}")
        # Upper bound is enforced when the ticker is built
        self._strike = value
        return self

    def build(self) -> str:
        """Validate the collected fields and return the canonical ticker string."""
        return encode(self.build_ticker())

    def build_ticker(self) -> OptionTicker:
        """Validate the collected fields and return an OptionTicker."""
        if self._underlying is None:
            raise IncompleteBuilderError(
                "underlying",
                "Underlying ticker symbol must be set before building. Call with_underlying() first."
            )
        if self._expiration_date is None:
            raise IncompleteBuilderError(
                "expiration_date",
                "Expiration date must be set before building. Call with_expiration() first."
            )
        if self._option_type is None:
            raise IncompleteBuilderError(
                "option_type",
                "Option type must be set before building. Call as_call(), as_put(), or with_type() first."
            )
        if self._strike is None:
            raise IncompleteBuilderError(
                "strike",
                "Strike price must be set before building. Call with_strike() first."
            )
        return OptionTicker(self._underlying, self._expiration_date, self._option_type, self._strike)

    def reset(self) -> "OptionsTickerBuilder":
        """Clear every field so the builder can be reused."""
        self._underlying = None
        self._expiration_date = None
        self._option_type = None
        self._strike = None
        return self

    def __repr__(self) -> str:
        return (f"OptionsTickerBuilder(underlying={self._underlying!r}, "
                f"expiration_date={self._expiration_date!r}, "
                f"option_type={self._option_type!r}, strike={self._strike!r})")
