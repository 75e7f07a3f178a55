"""Fetch an options chain snapshot from Polygon.io and save it as CSV.

Requirements:
    pip install -e .

Setup:
    1. Sign up at https://polygon.io
    2. Get your API key from dashboard
    3. Set POLYGON_API_KEY, pass --api-key, or put it in polygon.yaml:

        polygon:
          api_key: YOUR_KEY

Usage:
    python3 fetch_polygon.py SPY
    python3 fetch_polygon.py SPY --from-dte 30 --to-dte 45 --puts-only
    python3 fetch_polygon.py SPY --config polygon.yaml --output data/spy.csv
"""

import argparse
import os
import sys
from datetime import date, timedelta
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

from polygon_options.builders.query_builders import ChainSnapshotQueryBuilder
from polygon_options.client import OptionsService, PolygonHttpClient, load_config
from polygon_options.data.frames import chain_to_frame
from polygon_options.models.responses import OptionSnapshot
from polygon_options.utils.error_handling import PolygonError
from polygon_options.utils.logging_config import setup_logging

PAGE_LIMIT = 250


def _cursor_from(next_url: Optional[str]) -> Optional[str]:
    """Pull the cursor query parameter out of a next_url link."""
    if not next_url:
        return None
    values = parse_qs(urlparse(next_url).query).get('cursor')
    return values[0] if values else None


def fetch_chain(
    service: OptionsService,
    ticker: str,
    expiration_gte: date,
    expiration_lte: date,
    contract_type: Optional[str] = None,
    max_pages: int = 20,
) -> List[OptionSnapshot]:
    """Fetch every contract on ticker expiring within [expiration_gte, expiration_lte].

    Follows next_url pagination up to max_pages pages.
    """
    snapshots: List[OptionSnapshot] = []
    cursor = None

    for page in range(max_pages):
        builder = (ChainSnapshotQueryBuilder(service, ticker)
                   .expiring_between(expiration_gte, expiration_lte)
                   .limit(PAGE_LIMIT))
        if contract_type == 'call':
            builder.calls_only()
        elif contract_type == 'put':
            builder.puts_only()
        if cursor:
            builder.with_cursor(cursor)

        response = builder.execute()
        snapshots.extend(response.results or [])
        print(f"Page {page + 1}: {len(response.results or [])} contracts")

        cursor = _cursor_from(response.next_url)
        if not cursor:
            break

    return snapshots


def main():
    parser = argparse.ArgumentParser(description='Fetch an options chain snapshot from Polygon.io')
    parser.add_argument('ticker', help='Underlying symbol (e.g., SPY)')
    parser.add_argument('--api-key', help='Polygon.io API key (or set POLYGON_API_KEY env var)')
    parser.add_argument('--config', help='YAML config file (default: polygon.yaml)')
    parser.add_argument('--from-dte', type=int, default=30, help='Minimum days to expiration')
    parser.add_argument('--to-dte', type=int, default=45, help='Maximum days to expiration')
    type_group = parser.add_mutually_exclusive_group()
    type_group.add_argument('--calls-only', action='store_true', help='Only fetch calls')
    type_group.add_argument('--puts-only', action='store_true', help='Only fetch puts')
    parser.add_argument('--output', help='Output CSV file (default: data/{TICKER}_options.csv)')
    parser.add_argument('--log-level', default='INFO', help='Logging level (default: INFO)')

    args = parser.parse_args()
    setup_logging(log_level=args.log_level)

    config = load_config(args.config)
    if args.api_key:
        config.api_key = args.api_key
    if not config.api_key:
        print("❌ Error: No API key provided")
        print("Set POLYGON_API_KEY environment variable, use --api-key, or add it to polygon.yaml")
        sys.exit(1)

    if args.from_dte > args.to_dte:
        print("❌ --from-dte must not exceed --to-dte")
        sys.exit(1)

    today = date.today()
    expiration_gte = today + timedelta(days=args.from_dte)
    expiration_lte = today + timedelta(days=args.to_dte)
    contract_type = 'call' if args.calls_only else 'put' if args.puts_only else None

    print(f"Fetching {args.ticker.upper()} options expiring "
          f"{expiration_gte.isoformat()} to {expiration_lte.isoformat()}...")

    try:
        with PolygonHttpClient(config) as http:
            service = OptionsService(http)
            snapshots = fetch_chain(
                service, args.ticker.upper(), expiration_gte, expiration_lte, contract_type
            )
    except PolygonError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    df = chain_to_frame(snapshots)
    output_file = args.output or f"data/{args.ticker.upper()}_options.csv"
    os.makedirs(os.path.dirname(output_file) or '.', exist_ok=True)
    df.to_csv(output_file, index=False)

    print(f"\n✅ Successfully fetched {len(df)} options")
    print(f"📁 Saved to: {output_file}")


if __name__ == '__main__':
    main()
