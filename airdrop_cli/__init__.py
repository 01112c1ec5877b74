"""
Airdrop CLI

Command-line interface for building and checking Merkle distribution artifacts.

Usage:
    python -m airdrop_cli build recipients.csv --out airdrop_setup.json
    python -m airdrop_cli verify airdrop_setup.json
    python -m airdrop_cli proof airdrop_setup.json 0x9621dde636de098b43efb0fa9b61facfe328f99d
    python -m airdrop_cli config --init
"""

__version__ = "0.1.0"
