"""Public keys, instructions and program-derived addresses."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

PUBLIC_KEY_LENGTH = 32
MAX_SEEDS = 16
MAX_SEED_LENGTH = 32
_PDA_MARKER = b"ProgramDerivedAddress"

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}

# Curve25519 field prime and the twisted Edwards constant d.
_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P


def b58encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    raw = bytes(data)
    stripped = raw.lstrip(b"\x00")
    leading = len(raw) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, rem = divmod(number, 58)
        digits.append(_ALPHABET[rem])
    return "1" * leading + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode a base58 string; raises ValueError on characters outside the alphabet."""
    stripped = text.lstrip("1")
    leading = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\x00" * leading + body


@dataclass(frozen=True, order=True)
class PublicKey:
    """A 32-byte account address."""

    data: bytes = bytes(PUBLIC_KEY_LENGTH)

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != PUBLIC_KEY_LENGTH:
            raise ValueError(
                f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_base58(cls, value: str) -> PublicKey:
        """Parse a base58 address; shorter decodings are left-padded with zeros."""
        raw = b58decode(value)
        if len(raw) > PUBLIC_KEY_LENGTH:
            raise ValueError(f"base58 value decodes to {len(raw)} bytes, too long")
        return cls(raw.rjust(PUBLIC_KEY_LENGTH, b"\x00"))

    def to_base58(self) -> str:
        return b58encode(self.data)

    def is_zero(self) -> bool:
        return not any(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PublicKey({self.to_base58()!r})"


@dataclass(frozen=True)
class AccountMeta:
    """An account referenced by an instruction."""

    pubkey: PublicKey
    is_signer: bool
    is_writable: bool


@dataclass(frozen=True)
class Instruction:
    """A program invocation: program id, accounts and opaque data."""

    program_id: PublicKey
    accounts: tuple[AccountMeta, ...] = ()
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "accounts", tuple(self.accounts))
        object.__setattr__(self, "data", bytes(self.data))


def is_on_curve(data: bytes) -> bool:
    """Tell whether 32 bytes decode to a point on the ed25519 curve."""
    raw = bytes(data)
    if len(raw) != PUBLIC_KEY_LENGTH:
        raise ValueError(f"expected {PUBLIC_KEY_LENGTH} bytes, got {len(raw)}")
    y = (int.from_bytes(raw, "little") & ((1 << 255) - 1)) % _P
    yy = y * y % _P
    u = (yy - 1) % _P
    v = (_D * yy + 1) % _P
    x_squared = u * pow(v, -1, _P) % _P
    return x_squared == 0 or pow(x_squared, (_P - 1) // 2, _P) == 1


class _OnCurveError(ValueError):
    pass


def create_program_address(seeds: Iterable[bytes], program_id: PublicKey) -> PublicKey:
    """Derive an off-curve address from seeds and a program id."""
    seed_list = [bytes(seed) for seed in seeds]
    if len(seed_list) > MAX_SEEDS:
        raise ValueError(f"at most {MAX_SEEDS} seeds are allowed")
    for seed in seed_list:
        if len(seed) > MAX_SEED_LENGTH:
            raise ValueError(f"seed longer than {MAX_SEED_LENGTH} bytes")
    digest = hashlib.sha256(
        b"".join(seed_list) + bytes(program_id) + _PDA_MARKER
    ).digest()
    if is_on_curve(digest):
        raise _OnCurveError("derived address falls on the curve")
    return PublicKey(digest)


def find_program_address(
    seeds: Iterable[bytes], program_id: PublicKey
) -> tuple[PublicKey, int]:
    """Search bump seeds from 255 downwards for a valid program address."""
    base = [bytes(seed) for seed in seeds]
    for bump in range(255, 0, -1):
        try:
            return create_program_address([*base, bytes([bump])], program_id), bump
        except _OnCurveError:
            continue
    raise ValueError("unable to find a viable program address")


SYSTEM_PROGRAM_ID = PublicKey.from_base58("11111111111111111111111111111111")
STAKE_PROGRAM_ID = PublicKey.from_base58("Stake11111111111111111111111111111111111111")
STAKE_CONFIG_PUBKEY = PublicKey.from_base58("StakeConfig11111111111111111111111111111111")
TOKEN_PROGRAM_ID = PublicKey.from_base58("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
METAPLEX_TOKEN_META_PROGRAM_ID = PublicKey.from_base58(
    "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"
)
SPL_NAME_SERVICE_PROGRAM_ID = PublicKey.from_base58(
    "namesLPneVptA9Z5rqUDD9tMTWEJwofgaYwp8cawRkX"
)
SECP256K1_PROGRAM_ID = PublicKey.from_base58(
    "KeccakSecp256k11111111111111111111111111111"
)
SYSVAR_RENT_PUBKEY = PublicKey.from_base58("SysvarRent111111111111111111111111111111111")
SYSVAR_CLOCK_PUBKEY = PublicKey.from_base58("SysvarC1ock11111111111111111111111111111111")
SYSVAR_RECENT_BLOCKHASHES_PUBKEY = PublicKey.from_base58(
    "SysvarRecentB1ockHashes11111111111111111111"
)
SYSVAR_STAKE_HISTORY_PUBKEY = PublicKey.from_base58(
    "SysvarStakeHistory1111111111111111111111111"
)