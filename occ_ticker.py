"""Encode or decode OCC option ticker symbols from the command line.

Usage:
    python3 occ_ticker.py encode UBER 2022-01-21 call 50
    python3 occ_ticker.py decode O:SPY251219C00650500
    python3 occ_ticker.py split O:SPY251219C00650500
"""

import argparse
import sys

from polygon_options.builders.ticker_builder import OptionsTickerBuilder
from polygon_options.occ import best_effort_split, decode
from polygon_options.utils.error_handling import FormatError


def _encode(args) -> str:
    builder = (OptionsTickerBuilder()
               .with_underlying(args.underlying)
               .with_expiration(args.expiration)
               .with_type(args.option_type)
               .with_strike(args.strike))
    return builder.build()


def _decode(args) -> str:
    ticker = decode(args.symbol)
    return "\n".join([
        f"Underlying:  {ticker.underlying}",
        f"Expiration:  {ticker.expiration_date.isoformat()}",
        f"Type:        {ticker.option_type.value}",
        f"Strike:      {ticker.strike}",
        f"Canonical:   {ticker}",
    ])


def _split(args) -> str:
    underlying, contract = best_effort_split(args.symbol)
    return f"{underlying or '-'} {contract}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Encode or decode OCC option ticker symbols')
    subparsers = parser.add_subparsers(dest='command', required=True)

    encode_parser = subparsers.add_parser('encode', help='Build a ticker from its components')
    encode_parser.add_argument('underlying', help='Underlying symbol, 1-6 letters (e.g., SPY)')
    encode_parser.add_argument('expiration', help='Expiration date (YYYY-MM-DD)')
    encode_parser.add_argument('option_type', choices=['call', 'put'], help='Option type')
    encode_parser.add_argument('strike', help='Strike price (e.g., 650.5)')
    encode_parser.set_defaults(handler=_encode)

    decode_parser = subparsers.add_parser('decode', help='Parse a ticker into its components')
    decode_parser.add_argument('symbol', help='OCC ticker (e.g., O:SPY251219C00650000)')
    decode_parser.set_defaults(handler=_decode)

    split_parser = subparsers.add_parser(
        'split', help='Split a symbol into underlying and contract without validating it'
    )
    split_parser.add_argument('symbol', help='Option symbol, with or without O: prefix')
    split_parser.set_defaults(handler=_split)

    args = parser.parse_args(argv)

    try:
        print(args.handler(args))
    except FormatError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
