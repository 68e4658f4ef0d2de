"""Name service record parsing and account key derivation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import ClassVar

from solkit.core import (
    PUBLIC_KEY_LENGTH,
    SPL_NAME_SERVICE_PROGRAM_ID,
    PublicKey,
    find_program_address,
)

HASH_PREFIX = "SPL Name Service"

TWITTER_VERIFICATION_AUTHORITY = PublicKey.from_base58(
    "FvPH7PrVrLGKPfqaf3xJodFTjZriqrAXXLTVWEorTFBi"
)
TWITTER_ROOT_PARENT_REGISTRY_KEY = PublicKey.from_base58(
    "4YcexoW3r78zz16J2aqmukBLRwGq6rAvWzJpkYAXqebv"
)
SOL_TLD_AUTHORITY = PublicKey.from_base58(
    "58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx"
)


@dataclass(frozen=True)
class NameRecordHeader:
    """The fixed header of a name record followed by its payload."""

    parent_name: PublicKey
    owner: PublicKey
    name_class: PublicKey
    data: bytes

    HEADER_SIZE: ClassVar[int] = 3 * PUBLIC_KEY_LENGTH

    @classmethod
    def from_bytes(cls, data: bytes) -> NameRecordHeader:
        raw = bytes(data)
        if len(raw) < cls.HEADER_SIZE:
            raise ValueError(
                f"data length should be at least {cls.HEADER_SIZE}, got {len(raw)}"
            )
        return cls(
            parent_name=PublicKey(raw[0:32]),
            owner=PublicKey(raw[32:64]),
            name_class=PublicKey(raw[64:96]),
            data=raw[96:],
        )


def get_hash_name(name: str) -> bytes:
    """Hash a name the way the name service program expects."""
    return hashlib.sha256((HASH_PREFIX + name).encode("utf-8")).digest()


def get_name_account_key(
    hash_name: bytes, name_class: PublicKey, name_parent: PublicKey
) -> PublicKey:
    """Derive the account address holding the named record."""
    key, _ = find_program_address(
        [bytes(hash_name), bytes(name_class), bytes(name_parent)],
        SPL_NAME_SERVICE_PROGRAM_ID,
    )
    return key


def get_twitter_registry_key(twitter_handle: str) -> PublicKey:
    """Derive the registry address for a twitter handle."""
    return get_name_account_key(
        get_hash_name(twitter_handle), PublicKey(), TWITTER_ROOT_PARENT_REGISTRY_KEY
    )