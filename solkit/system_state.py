"""Account state layouts owned by the system program."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from solkit.core import PublicKey
from solkit.encoding import BinaryReader, DecodeError

FEE_CALCULATOR_SIZE = 8
NONCE_ACCOUNT_SIZE = 80


@dataclass(frozen=True)
class FeeCalculator:
    """The fee schedule stored alongside a durable nonce."""

    lamports_per_signature: int

    SIZE: ClassVar[int] = FEE_CALCULATOR_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> FeeCalculator:
        raw = bytes(data)
        if len(raw) < cls.SIZE:
            raise DecodeError("fee calculator data size is not enough")
        return cls(lamports_per_signature=BinaryReader(raw).u64())


@dataclass(frozen=True)
class NonceAccount:
    """The contents of a durable nonce account."""

    version: int
    state: int
    authorized_pubkey: PublicKey
    nonce: PublicKey
    fee_calculator: FeeCalculator

    SIZE: ClassVar[int] = NONCE_ACCOUNT_SIZE

    @classmethod
    def from_bytes(cls, data: bytes) -> NonceAccount:
        raw = bytes(data)
        if len(raw) < cls.SIZE:
            raise DecodeError("nonce account data size is not enough")
        reader = BinaryReader(raw)
        version = reader.u32()
        state = reader.u32()
        authorized_pubkey = reader.pubkey()
        nonce = reader.pubkey()
        fee_calculator = FeeCalculator.from_bytes(reader.remaining())
        return cls(
            version=version,
            state=state,
            authorized_pubkey=authorized_pubkey,
            nonce=nonce,
            fee_calculator=fee_calculator,
        )