"""
Test fixtures package for Merkle tests.

Usage:
    from fixtures import make_leaves, flip_bit

    def test_something():
        leaves = make_leaves(5)
"""

from .common import (
    SAMPLE_EMAILS,
    make_items,
    make_leaves,
    hash_strings,
    flip_bit,
)

__all__ = [
    "SAMPLE_EMAILS",
    "make_items",
    "make_leaves",
    "hash_strings",
    "flip_bit",
]
