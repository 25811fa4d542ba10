"""
CLI Verify Command

Check an inclusion proof document for an item against a trusted root.

Usage:
    merkle verify marco@example.com --proof proof.json --root 0x...
    merkle prove ... | merkle verify marco@example.com --proof - --root 0x... --json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.hashing import encode_item, from_hex, get_hash_function, normalize_algorithm, to_hex
from core.merkle import verify_proof
from core.schemas.errors import MerkleException
from core.schemas.proof import ProofDocument

from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    parse_item,
    read_text_arg,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    item: str = ""
    algorithm: str = ""
    item_digest: str = ""
    root: str = ""
    steps: int = 0
    valid: bool = False
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["warnings"]:
            del d["warnings"]
        return d


def print_summary_human(summary: VerifySummary) -> None:
    print(f"item: {summary.item}")
    print(f"algorithm: {summary.algorithm}")
    print(f"item_digest: {summary.item_digest}")
    print(f"root: {summary.root}")
    print(f"steps: {summary.steps}")
    print(f"valid: {str(summary.valid).lower()}")
    for warning in summary.warnings:
        print(f"  ! {warning}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    The hash algorithm recorded in the proof document is used for
    replay; the configured leaf encoding turns the item into bytes.

    Returns:
        Exit code (0 valid, 2 invalid, 1 malformed input)
    """
    config = args.cli_config
    warnings: list[str] = []

    try:
        document = ProofDocument.from_json(read_text_arg(args.proof))
        root = from_hex(args.root)
        hash_fn = get_hash_function(document.algorithm)
        item = parse_item(args.target, config.leaf_encoding)
        item_digest = hash_fn(encode_item(item, config.leaf_encoding))
        valid = verify_proof(item_digest, document.to_proof(), root, hash_fn)
    except (MerkleException, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if normalize_algorithm(document.algorithm) != normalize_algorithm(config.hash_algorithm):
        warnings.append(
            f"proof uses {document.algorithm}, configured algorithm is {config.hash_algorithm}"
        )
    if document.item_digest != to_hex(item_digest):
        warnings.append("item digest differs from the one recorded in the proof")
    if document.root != to_hex(root):
        warnings.append("trusted root differs from the root recorded in the proof")

    summary = VerifySummary(
        item=args.target,
        algorithm=document.algorithm,
        item_digest=to_hex(item_digest),
        root=to_hex(root),
        steps=len(document.steps),
        valid=valid,
        warnings=warnings,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if valid:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
