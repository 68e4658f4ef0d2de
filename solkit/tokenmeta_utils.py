"""Address derivation for token metadata accounts."""

from __future__ import annotations

from solkit.core import (
    METAPLEX_TOKEN_META_PROGRAM_ID,
    PublicKey,
    find_program_address,
)

_EDITION_MARKER_BIT_SIZE = 248


def _derive(mint: PublicKey, *extra: bytes) -> PublicKey:
    seeds = [b"metadata", bytes(METAPLEX_TOKEN_META_PROGRAM_ID), bytes(mint), *extra]
    address, _bump = find_program_address(seeds, METAPLEX_TOKEN_META_PROGRAM_ID)
    return address


def get_token_meta_pubkey(mint: PublicKey) -> PublicKey:
    """Return the metadata account address of a mint."""
    return _derive(mint)


def get_master_edition(mint: PublicKey) -> PublicKey:
    """Return the master edition account address of a mint."""
    return _derive(mint, b"edition")


def get_edition_mark(mint: PublicKey, edition: int) -> PublicKey:
    """Return the edition marker account address covering ``edition``."""
    if not 0 <= edition < 2**64:
        raise ValueError("edition must fit in an unsigned 64-bit integer")
    edition_number = edition // _EDITION_MARKER_BIT_SIZE
    return _derive(mint, b"edition", str(edition_number).encode())