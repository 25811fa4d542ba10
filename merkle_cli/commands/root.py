"""
CLI Root Command

Commit to an ordered list of items and print the Merkle root.

Usage:
    merkle root a@example.com b@example.com c@example.com
    merkle root --items-file emails.txt --levels
    merkle root --items-file - --json < emails.txt
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle import MerkleProver, MerkleTree
from core.schemas.errors import MerkleException

from merkle_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS, collect_items


logger = logging.getLogger(__name__)


@dataclass
class RootSummary:
    """Summary of a tree build for CLI output."""
    algorithm: str = ""
    encoding: str = ""
    root: str = ""
    leaf_count: int = 0
    depth: int = 0
    levels: list[list[str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["levels"]:
            del d["levels"]
        return d


def build_summary(tree: MerkleTree, algorithm: str, encoding: str, include_levels: bool) -> RootSummary:
    summary = RootSummary(
        algorithm=algorithm,
        encoding=encoding,
        root=to_hex(tree.root),
        leaf_count=tree.leaf_count,
        depth=tree.depth,
    )
    if include_levels:
        summary.levels = [[to_hex(d) for d in level] for level in tree.levels]
    return summary


def print_summary_human(summary: RootSummary) -> None:
    print(f"algorithm: {summary.algorithm}")
    print(f"leaves: {summary.leaf_count}")
    print(f"depth: {summary.depth}")
    print(f"root: {summary.root}")
    for i, level in enumerate(summary.levels):
        print(f"\nlevel {i} ({len(level)}):")
        for digest in level:
            print(f"  {digest}")


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Returns:
        Exit code
    """
    config = args.cli_config

    try:
        items = collect_items(args, config)
        prover = MerkleProver(config.hash_algorithm, config.leaf_encoding)
        tree = prover.build_tree(items)
    except (MerkleException, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Built tree over {tree.leaf_count} items")

    summary = build_summary(tree, config.hash_algorithm, config.leaf_encoding, args.levels)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
