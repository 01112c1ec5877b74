"""
CLI command modules.
"""

from airdrop_cli.commands import build, verify, proof

__all__ = ["build", "verify", "proof"]
