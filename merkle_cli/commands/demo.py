"""
CLI Demo Command

Walk the whole flow on a small list of e-mail addresses: hash, build,
prove one address, verify it against the root and against an unrelated
root.

Usage:
    merkle demo
    merkle demo alice@example.com bob@example.com --target bob@example.com
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle import MerkleProver, MerkleVerifier
from core.schemas.errors import MerkleException

from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    parse_item,
)


logger = logging.getLogger(__name__)


DEMO_EMAILS = ["marco@example.com", "jenna@example.com", "tanay@example.com"]


def demo_cmd(args: Namespace) -> int:
    """
    Execute the demo command.

    Returns:
        Exit code (0 when the proof verifies and the unrelated root is rejected)
    """
    config = args.cli_config
    raw_items = args.items or DEMO_EMAILS
    raw_target = args.target or raw_items[0]

    try:
        items = [parse_item(text, config.leaf_encoding) for text in raw_items]
        target = parse_item(raw_target, config.leaf_encoding)
        prover = MerkleProver(config.hash_algorithm, config.leaf_encoding)
        verifier = MerkleVerifier(config.hash_algorithm, config.leaf_encoding)

        tree = prover.build_tree(items)
        proof = tree.prove(prover.hash_item(target))
    except MerkleException as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"items: {len(items)}")
    print(f"level sizes: {' -> '.join(str(len(level)) for level in tree.levels)}")
    print(f"root: {to_hex(tree.root)}")

    if proof is None:
        print(f"{raw_target} not found in the tree.")
        return EXIT_VERIFICATION_FAILED

    print(f"\nproof for {raw_target}:")
    for step in proof:
        print(f"  {step.side.value:<5} {to_hex(step.digest)}")

    valid = verifier.verify_item(target, proof, tree.root)
    print(f"\n{raw_target} is valid: {str(valid).lower()}")

    unrelated_root = prover.hash_item(f"not-a-root:{to_hex(tree.root)}")
    rejected = not verifier.verify_item(target, proof, unrelated_root)
    print(f"unrelated root rejected: {str(rejected).lower()}")

    if valid and rejected:
        return EXIT_SUCCESS
    logger.warning("Demo round trip did not behave as expected")
    return EXIT_VERIFICATION_FAILED
