"""
Helpers shared by the CLI commands: reading items and proof documents.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from core.config import RuntimeConfig
from core.schemas.errors import InvalidInputException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def parse_item(text: str, encoding: str) -> Any:
    """
    Turn one command-line/file token into an item.

    Under canonical_json each token is a JSON value; under utf8 it is the
    string itself.
    """
    if encoding == "canonical_json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputException(
                f"Item is not valid JSON: {text[:40]!r}",
                details={"error": str(e)},
            ) from e
    return text


def read_items_file(path: str) -> list[str]:
    """One item per line; blank lines are skipped. '-' reads stdin."""
    if path == "-":
        lines = sys.stdin.read().splitlines()
    else:
        lines = Path(path).read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


def collect_items(args: Namespace, config: RuntimeConfig) -> list[Any]:
    """
    Items from positional arguments followed by --items-file, order kept.

    Raises:
        InvalidInputException: If no items were given at all
    """
    raw: list[str] = list(getattr(args, "items", None) or [])
    items_file = getattr(args, "items_file", None)
    if items_file:
        raw.extend(read_items_file(items_file))

    if not raw:
        raise InvalidInputException("No items given (pass ITEMS or --items-file)")

    return [parse_item(text, config.leaf_encoding) for text in raw]


def read_text_arg(path: str) -> str:
    """Contents of `path`, or stdin when path is '-'."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")
