"""Pre-flight validation rules for options request objects.

Each validate_* function returns every failed rule as a ValidationError so
callers see all problems at once. validate_request() dispatches on the request
type and raises PolygonValidationError when anything failed.
"""

import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from ..models.responses import AggregateInterval, SortOrder
from ..occ.codec import try_decode
from ..utils.error_handling import PolygonValidationError, ValidationError
from .options_requests import (
    GetBarsRequest,
    GetChainSnapshotRequest,
    GetContractDetailsRequest,
    GetDailyOpenCloseRequest,
    GetLastTradeRequest,
    GetPreviousDayBarRequest,
    GetQuotesRequest,
    GetSnapshotRequest,
    GetTradesRequest,
)

logger = logging.getLogger("polygon_options.validators")

MAX_UNDERLYING_ASSET_LENGTH = 10
MIN_OPTION_CONTRACT_LENGTH = 15
VALID_CONTRACT_TYPES = ("call", "put")
VALID_ORDERS = ("asc", "desc")

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_iso_date(value: Optional[str]) -> bool:
    """Return True if value is a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def _check_options_ticker(errors: List[ValidationError], ticker: str) -> None:
    if not ticker or not str(ticker).strip():
        errors.append(ValidationError("options_ticker", "Options ticker must not be empty.", ticker))
    elif try_decode(ticker) is None:
        errors.append(ValidationError(
            "options_ticker",
            "Options ticker must be in valid OCC format (e.g., 'O:SPY251219C00650000').",
            ticker,
        ))


def _check_underlying_asset(errors: List[ValidationError], underlying: str) -> None:
    if not underlying or not str(underlying).strip():
        errors.append(ValidationError(
            "underlying_asset", "Underlying asset ticker must not be empty.", underlying
        ))
    elif len(underlying) > MAX_UNDERLYING_ASSET_LENGTH:
        errors.append(ValidationError(
            "underlying_asset",
            f"Underlying asset ticker must not exceed {MAX_UNDERLYING_ASSET_LENGTH} characters.",
            underlying,
        ))


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        return False
    return number.is_finite() and number > 0


def _check_limit(errors: List[ValidationError], limit: Optional[int]) -> None:
    if limit is not None and limit <= 0:
        errors.append(ValidationError("limit", "Limit must be greater than 0.", limit))


def _check_order(errors: List[ValidationError], order: Optional[str]) -> None:
    if order is not None and order not in VALID_ORDERS:
        errors.append(ValidationError("order", "Order must be 'asc' or 'desc'.", order))


def _check_optional_date(errors: List[ValidationError], name: str, label: str, value: Optional[str]) -> None:
    if value is not None and not is_iso_date(value):
        errors.append(ValidationError(name, f"{label} must be in YYYY-MM-DD format.", value))


def _check_required_date(errors: List[ValidationError], name: str, label: str, value: str) -> None:
    if not value:
        errors.append(ValidationError(name, f"{label} must not be empty.", value))
    elif not is_iso_date(value):
        errors.append(ValidationError(name, f"{label} must be in YYYY-MM-DD format.", value))


def validate_contract_details(request: GetContractDetailsRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    _check_optional_date(errors, "as_of", "As-of date", request.as_of)
    return errors


def validate_snapshot(request: GetSnapshotRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_underlying_asset(errors, request.underlying_asset)
    contract = request.option_contract
    if not contract or not contract.strip():
        errors.append(ValidationError("option_contract", "Option contract must not be empty.", contract))
    elif len(contract) < MIN_OPTION_CONTRACT_LENGTH:
        errors.append(ValidationError(
            "option_contract",
            f"Option contract must be at least {MIN_OPTION_CONTRACT_LENGTH} characters "
            "(OCC format without 'O:' prefix).",
            contract,
        ))
    return errors


def validate_chain_snapshot(request: GetChainSnapshotRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_underlying_asset(errors, request.underlying_asset)
    if request.strike_price is not None and not _is_positive_number(request.strike_price):
        errors.append(ValidationError(
            "strike_price", "Strike price must be a finite number greater than 0.", request.strike_price
        ))
    if request.contract_type is not None and request.contract_type not in VALID_CONTRACT_TYPES:
        errors.append(ValidationError(
            "contract_type", "Contract type must be 'call' or 'put'.", request.contract_type
        ))
    _check_optional_date(errors, "expiration_date_gte", "Expiration date (gte)", request.expiration_date_gte)
    _check_optional_date(errors, "expiration_date_lte", "Expiration date (lte)", request.expiration_date_lte)
    _check_limit(errors, request.limit)
    _check_order(errors, request.order)
    return errors


def validate_last_trade(request: GetLastTradeRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    return errors


def validate_quotes(request: GetQuotesRequest) -> List[ValidationError]:
    """Rules shared by the quotes and trades endpoints."""
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    _check_limit(errors, request.limit)
    _check_order(errors, request.order)
    return errors


def validate_bars(request: GetBarsRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    if request.multiplier is None or request.multiplier <= 0:
        errors.append(ValidationError(
            "multiplier", "Multiplier must be greater than 0.", request.multiplier
        ))
    if not isinstance(request.timespan, AggregateInterval):
        errors.append(ValidationError(
            "timespan",
            "Timespan must be one of: " + ", ".join(i.value for i in AggregateInterval) + ".",
            request.timespan,
        ))
    _check_required_date(errors, "from_date", "From date", request.from_date)
    _check_required_date(errors, "to_date", "To date", request.to_date)
    if request.sort is not None and not isinstance(request.sort, SortOrder):
        errors.append(ValidationError("sort", "Sort must be 'asc' or 'desc'.", request.sort))
    _check_limit(errors, request.limit)
    return errors


def validate_previous_day_bar(request: GetPreviousDayBarRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    return errors


def validate_daily_open_close(request: GetDailyOpenCloseRequest) -> List[ValidationError]:
    errors: List[ValidationError] = []
    _check_options_ticker(errors, request.options_ticker)
    _check_required_date(errors, "date", "Date", request.date)
    return errors


_VALIDATORS: Dict[type, Callable[[Any], List[ValidationError]]] = {
    GetContractDetailsRequest: validate_contract_details,
    GetSnapshotRequest: validate_snapshot,
    GetChainSnapshotRequest: validate_chain_snapshot,
    GetLastTradeRequest: validate_last_trade,
    GetQuotesRequest: validate_quotes,
    GetTradesRequest: validate_quotes,
    GetBarsRequest: validate_bars,
    GetPreviousDayBarRequest: validate_previous_day_bar,
    GetDailyOpenCloseRequest: validate_daily_open_close,
}


def validate_request(request: Any) -> None:
    """Validate a request object before it is sent.

    Args:
        request: One of the Get*Request dataclasses

    Raises:
        PolygonValidationError: If any rule fails (all failures are attached)
        TypeError: If no rule set is registered for the request type
    """
    validator = _VALIDATORS.get(type(request))
    if validator is None:
        raise TypeError(f"No validator registered for {type(request).__name__}")

    errors = validator(request)
    if errors:
        logger.debug("%s failed validation: %s", type(request).__name__, errors)
        raise PolygonValidationError(errors)
