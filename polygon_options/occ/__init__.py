"""OCC options ticker encoding, decoding and symbol splitting."""

from polygon_options.occ.codec import create, decode, encode, is_valid, try_decode
from polygon_options.occ.split import best_effort_split, split_option_symbol

__all__ = [
    'encode',
    'decode',
    'try_decode',
    'is_valid',
    'create',
    'split_option_symbol',
    'best_effort_split',
]
