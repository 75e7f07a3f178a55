"""Unit tests for the OCC ticker codec and the OptionTicker value type."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from polygon_options.models.option_ticker import OptionTicker, OptionType
from polygon_options.occ.codec import (
    create,
    decode,
    encode,
    is_valid,
    split_body,
    strip_prefix,
    try_decode,
)
from polygon_options.utils.error_handling import (
    BadSuffixLengthError,
    FormatError,
    InvalidDateError,
    InvalidTypeError,
    InvalidUnderlyingError,
    MalformedSuffixError,
    MissingPrefixError,
    NegativeOrOversizedStrikeError,
    TooShortError,
    UnderlyingNotFoundError,
)


class TestEncode:
    """Test suite for encoding tickers to canonical strings."""

    def test_known_examples(self):
        """Test the documented canonical examples."""
        assert encode(OptionTicker("UBER", date(2022, 1, 21), OptionType.CALL, 50)) == \
            "O:UBER220121C00050000"
        assert encode(OptionTicker("F", date(2021, 11, 19), OptionType.PUT, 14)) == \
            "O:F211119P00014000"
        assert encode(OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, Decimal("650.50"))) == \
            "O:SPY251219C00650500"

    @pytest.mark.parametrize("strike,expected", [
        (50, "00050000"),
        (Decimal("650.50"), "00650500"),
        (14, "00014000"),
        (0, "00000000"),
        (Decimal("0.001"), "00000001"),
        (Decimal("99999.999"), "99999999"),
        (2.5, "00002500"),
    ])
    def test_strike_scaling(self, strike, expected):
        """Test strike is multiplied by 1000 and zero-padded to 8 digits."""
        ticker = OptionTicker("SPY", date(2025, 12, 19), OptionType.PUT, strike)
        assert encode(ticker)[-8:] == expected

    def test_strike_rounds_half_up(self):
        """Test sub-tenth-of-a-cent strikes round half away from zero."""
        ticker = OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, Decimal("10.0005"))
        assert encode(ticker) == "O:SPY251219C00010001"

        ticker = OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, Decimal("10.0004"))
        assert encode(ticker) == "O:SPY251219C00010000"

    def test_underlying_uppercased(self):
        """Test lowercase underlying is normalized."""
        ticker = OptionTicker("uber", date(2022, 1, 21), OptionType.CALL, 50)
        assert ticker.underlying == "UBER"
        assert str(ticker) == "O:UBER220121C00050000"

    def test_datetime_expiration_truncated(self):
        """Test a datetime expiration keeps only its date."""
        ticker = OptionTicker("SPY", datetime(2025, 12, 19, 16, 0), OptionType.CALL, 650)
        assert ticker.expiration_date == date(2025, 12, 19)
        assert str(ticker) == "O:SPY251219C00650000"

    def test_str_and_contract(self):
        """Test str() is the canonical form and contract drops the prefix."""
        ticker = OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, 650)
        assert str(ticker) == "O:SPY251219C00650000"
        assert ticker.contract == "SPY251219C00650000"

    def test_create_helpers(self):
        """Test module-level create and OptionTicker.create agree."""
        expected = "O:UBER220121C00050000"
        assert create("UBER", date(2022, 1, 21), OptionType.CALL, 50) == expected
        assert OptionTicker.create("UBER", date(2022, 1, 21), OptionType.CALL, 50) == expected


class TestOptionTickerValidation:
    """Test suite for construction-time invariants."""

    def test_negative_strike_rejected(self):
        """Test negative strike fails at construction."""
        with pytest.raises(NegativeOrOversizedStrikeError):
            OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, -10)

    def test_oversized_strike_rejected(self):
        """Test strike that needs more than 8 digits fails."""
        with pytest.raises(NegativeOrOversizedStrikeError):
            OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, 100000)

    def test_non_numeric_strike_rejected(self):
        """Test garbage strike values fail."""
        for bad in ("abc", float("nan"), float("inf"), True):
            with pytest.raises(NegativeOrOversizedStrikeError):
                OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, bad)

    @pytest.mark.parametrize("underlying", ["", "   ", "TOOLONG", "SP1", "S-P", None])
    def test_invalid_underlying_rejected(self, underlying):
        """Test underlying must be 1-6 letters."""
        with pytest.raises(InvalidUnderlyingError):
            OptionTicker(underlying, date(2025, 12, 19), OptionType.CALL, 100)

    def test_year_out_of_range_rejected(self):
        """Test expiration year must be encodable as 2000 + YY."""
        with pytest.raises(InvalidDateError):
            OptionTicker("SPY", date(1999, 12, 17), OptionType.CALL, 100)
        with pytest.raises(InvalidDateError):
            OptionTicker("SPY", date(2100, 1, 15), OptionType.CALL, 100)

    def test_option_type_must_be_enum(self):
        """Test raw strings are not accepted as option_type."""
        with pytest.raises(TypeError):
            OptionTicker("SPY", date(2025, 12, 19), "call", 100)

    def test_immutable(self):
        """Test ticker fields cannot be reassigned."""
        ticker = OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, 100)
        with pytest.raises(AttributeError):
            ticker.strike = Decimal("200")

    def test_equal_tickers_hash_equal(self):
        """Test equivalent strikes produce equal, hashable tickers."""
        a = OptionTicker("SPY", date(2025, 12, 19), OptionType.CALL, 650)
        b = OptionTicker("spy", date(2025, 12, 19), OptionType.CALL, Decimal("650.000"))
        assert a == b
        assert len({a, b}) == 1

    def test_option_type_codes(self):
        """Test OptionType code mapping."""
        assert OptionType.CALL.code == "C"
        assert OptionType.PUT.code == "P"
        assert OptionType.from_code("c") is OptionType.CALL
        assert OptionType.from_code("P") is OptionType.PUT
        with pytest.raises(InvalidTypeError):
            OptionType.from_code("X")


class TestDecode:
    """Test suite for decoding canonical strings."""

    def test_decode_components(self):
        """Test every field is recovered."""
        ticker = decode("O:SPY251219C00650500")

        assert ticker.underlying == "SPY"
        assert ticker.expiration_date == date(2025, 12, 19)
        assert ticker.option_type is OptionType.CALL
        assert ticker.strike == Decimal("650.5")
        assert ticker.is_call

    @pytest.mark.parametrize("symbol", [
        "O:UBER220121C00050000",
        "O:F211119P00014000",
        "O:SPY251219C00650500",
        "O:GOOGL240119P00000001",
        "O:BRKBXX301231C99999999",
    ])
    def test_round_trip(self, symbol):
        """Test encode(decode(s)) == s for canonical strings."""
        assert encode(decode(symbol)) == symbol

    def test_round_trip_from_components(self):
        """Test decode(encode(t)) == t."""
        ticker = OptionTicker("QQQ", date(2026, 3, 20), OptionType.PUT, Decimal("412.125"))
        assert decode(encode(ticker)) == ticker

    def test_case_insensitive(self):
        """Test prefix, letters and type character may be lowercase."""
        ticker = decode("o:uber220121c00050000")
        assert str(ticker) == "O:UBER220121C00050000"

    @pytest.mark.parametrize("underlying", ["A", "AB", "ABC", "ABCD", "ABCDE", "ABCDEF"])
    def test_underlying_lengths_one_to_six(self, underlying):
        """Test every allowed underlying length decodes."""
        ticker = decode(f"O:{underlying}251219C00100000")
        assert ticker.underlying == underlying

    def test_underlying_seven_letters_fails(self):
        """Test a seven-letter run is not an underlying."""
        with pytest.raises(UnderlyingNotFoundError):
            decode("O:ABCDEFG251219C00100000")

    @pytest.mark.parametrize("text", ["INVALID", "", None, "UBER220121C00050000", 12345])
    def test_missing_prefix(self, text):
        """Test inputs without the O: prefix fail."""
        with pytest.raises(MissingPrefixError):
            decode(text)

    def test_too_short(self):
        """Test bodies shorter than 16 characters fail."""
        with pytest.raises(TooShortError):
            decode("O:SPY251219C0065")
        with pytest.raises(TooShortError):
            decode("O:")

    def test_no_underlying(self):
        """Test a body that starts with a digit fails."""
        with pytest.raises(UnderlyingNotFoundError):
            decode("O:251219C006500000")

    def test_underlying_with_symbols(self):
        """Test non-letter characters in the underlying fail."""
        with pytest.raises(InvalidUnderlyingError):
            decode("O:SP.Y251219C00650000")

    def test_bad_suffix_length(self):
        """Test extra or missing strike digits fail."""
        with pytest.raises(BadSuffixLengthError):
            decode("O:SPY251219C006500000")
        with pytest.raises(BadSuffixLengthError):
            decode("O:SPY251219C0065000")

    def test_bad_suffix_length_is_malformed_suffix(self):
        """Test the suffix error hierarchy."""
        with pytest.raises(MalformedSuffixError):
            decode("O:SPY251219C006500000")

    def test_non_digit_strike(self):
        """Test strike field with letters fails."""
        with pytest.raises(MalformedSuffixError):
            decode("O:SPY251219C0065000X")

    @pytest.mark.parametrize("symbol", [
        "O:SPY251319C00650000",   # month 13
        "O:SPY250230C00650000",   # Feb 30
        "O:SPY250000C00650000",   # month 0
    ])
    def test_invalid_date(self, symbol):
        """Test impossible calendar dates fail."""
        with pytest.raises(InvalidDateError):
            decode(symbol)

    def test_leap_day(self):
        """Test Feb 29 decodes only in leap years."""
        assert decode("O:SPY240229C00650000").expiration_date == date(2024, 2, 29)
        with pytest.raises(InvalidDateError):
            decode("O:SPY250229C00650000")

    def test_invalid_type(self):
        """Test type character other than C/P fails."""
        with pytest.raises(InvalidTypeError):
            decode("O:SPY251219X00650000")

    def test_errors_are_value_errors(self):
        """Test callers can catch FormatError or ValueError."""
        with pytest.raises(FormatError):
            decode("garbage")
        with pytest.raises(ValueError):
            decode("garbage")


class TestTryDecode:
    """Test suite for the non-raising helpers."""

    def test_valid(self):
        """Test valid input decodes."""
        assert try_decode("O:F211119P00014000") == decode("O:F211119P00014000")
        assert is_valid("O:F211119P00014000")

    @pytest.mark.parametrize("text", ["INVALID", "", None, "O:ABCDEFG251219C00100000"])
    def test_invalid_returns_none(self, text):
        """Test malformed input returns None instead of raising."""
        assert try_decode(text) is None
        assert not is_valid(text)

    def test_option_ticker_aliases(self):
        """Test OptionTicker.parse/try_parse delegate to the codec."""
        assert OptionTicker.parse("O:UBER220121C00050000").underlying == "UBER"
        assert OptionTicker.try_parse("nope") is None


class TestBodyHelpers:
    """Test suite for prefix stripping and body splitting."""

    def test_strip_prefix(self):
        """Test prefix removal in any case."""
        assert strip_prefix("O:SPY") == "SPY"
        assert strip_prefix("o:SPY") == "SPY"

    def test_split_body(self):
        """Test the underlying/suffix boundary is the first digit."""
        assert split_body("uber220121C00050000") == ("UBER", "220121C00050000")
