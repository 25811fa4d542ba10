"""
Merkle CLI

Command-line interface for building Merkle roots and inclusion proofs.

Usage:
    python -m merkle_cli root a@example.com b@example.com
    python -m merkle_cli prove a@example.com --items-file emails.txt --out proof.json
    python -m merkle_cli verify a@example.com --proof proof.json --root 0x...
    python -m merkle_cli demo
"""

__version__ = "0.1.0"
