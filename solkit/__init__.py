"""Instruction builders, account decoders and address derivation for common Solana programs."""

__version__ = "0.1.0"