"""
CLI command modules.
"""

from merkle_cli.commands import demo, prove, root, verify

__all__ = ["demo", "prove", "root", "verify"]
