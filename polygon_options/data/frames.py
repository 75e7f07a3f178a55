"""Tabular views of API results as pandas DataFrames."""

import logging
from typing import List, Optional

import pandas as pd

from ..models.responses import OptionBar, OptionSnapshot
from ..occ.codec import try_decode

logger = logging.getLogger("polygon_options.frames")

CHAIN_COLUMNS = [
    'ticker', 'underlying', 'option_type', 'strike', 'expiration',
    'bid', 'ask', 'last', 'volume', 'open_interest',
    'implied_vol', 'delta', 'gamma', 'theta', 'vega',
]

BAR_COLUMNS = ['timestamp', 'open', 'high', 'low', 'close', 'volume', 'vwap', 'transactions']


def bars_to_frame(bars: Optional[List[OptionBar]]) -> pd.DataFrame:
    """Convert aggregate bars to a DataFrame indexed by bar start time (UTC).

    Args:
        bars: Bars from get_bars / get_previous_day_bar (may be None)

    Returns:
        DataFrame with BAR_COLUMNS minus timestamp, indexed by a DatetimeIndex
    """
    rows = [
        {
            'timestamp': bar.timestamp,
            'open': bar.open,
            'high': bar.high,
            'low': bar.low,
            'close': bar.close,
            'volume': bar.volume,
            'vwap': bar.vwap,
            'transactions': bar.transactions,
        }
        for bar in bars or []
    ]
    df = pd.DataFrame(rows, columns=BAR_COLUMNS)
    df['timestamp'] = pd.to_datetime(df['timestamp'], unit='ms', utc=True)
    return df.set_index('timestamp')


def _snapshot_row(snapshot: OptionSnapshot) -> Optional[dict]:
    details = snapshot.details
    ticker = try_decode(details.ticker) if details is not None else None
    if ticker is None:
        logger.warning(
            "Skipping snapshot with unparseable ticker: %r",
            details.ticker if details is not None else None
        )
        return None

    quote = snapshot.last_quote
    day = snapshot.day
    greeks = snapshot.greeks
    return {
        'ticker': str(ticker),
        'underlying': ticker.underlying,
        'option_type': ticker.option_type.value,
        'strike': float(ticker.strike),
        'expiration': ticker.expiration_date.isoformat(),
        'bid': quote.bid if quote is not None else None,
        'ask': quote.ask if quote is not None else None,
        'last': day.close if day is not None else None,
        'volume': day.volume if day is not None else None,
        'open_interest': snapshot.open_interest,
        'implied_vol': snapshot.implied_volatility,
        'delta': greeks.delta if greeks is not None else None,
        'gamma': greeks.gamma if greeks is not None else None,
        'theta': greeks.theta if greeks is not None else None,
        'vega': greeks.vega if greeks is not None else None,
    }


def chain_to_frame(snapshots: Optional[List[OptionSnapshot]]) -> pd.DataFrame:
    """Flatten a chain snapshot into one row per contract.

    Underlying, type, strike and expiration come from decoding the contract
    ticker, not from the details block. Contracts whose ticker does not decode
    are skipped with a warning.

    Args:
        snapshots: Results of get_chain_snapshot (may be None)

    Returns:
        DataFrame with CHAIN_COLUMNS, sorted by expiration, type and strike
    """
    rows = []
    for snapshot in snapshots or []:
        row = _snapshot_row(snapshot)
        if row is not None:
            rows.append(row)

    df = pd.DataFrame(rows, columns=CHAIN_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(['expiration', 'option_type', 'strike']).reset_index(drop=True)
