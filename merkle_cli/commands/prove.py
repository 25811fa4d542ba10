"""
CLI Prove Command

Generate an inclusion proof for one item and emit it as a proof document.

Usage:
    merkle prove marco@example.com marco@example.com jenna@example.com tanay@example.com
    merkle prove marco@example.com --items-file emails.txt --out proof.json
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.merkle import MerkleProver
from core.schemas.errors import MerkleException
from core.schemas.proof import ProofDocument

from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    collect_items,
    parse_item,
)


logger = logging.getLogger(__name__)


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Returns:
        Exit code (2 when the target is not among the items)
    """
    config = args.cli_config

    try:
        items = collect_items(args, config)
        target = parse_item(args.target, config.leaf_encoding)
        prover = MerkleProver(config.hash_algorithm, config.leaf_encoding)
        tree = prover.build_tree(items)
        target_digest = prover.hash_item(target)
        proof = tree.prove(target_digest)
    except (MerkleException, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if proof is None:
        print(f"Not found: {args.target!r} is not among the {tree.leaf_count} items", file=sys.stderr)
        return EXIT_VERIFICATION_FAILED

    document = ProofDocument.from_proof(
        target_digest,
        proof,
        tree.root,
        algorithm=config.hash_algorithm,
        leaf_count=tree.leaf_count,
    )
    logger.info(f"Proof for leaf {tree.index_of(target_digest)}: {len(proof)} steps")

    if args.out:
        Path(args.out).write_text(document.to_json() + "\n", encoding="utf-8")
        print(f"Wrote proof ({len(proof)} steps) to {args.out}")
    else:
        print(document.to_json())

    return EXIT_SUCCESS
