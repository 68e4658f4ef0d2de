"""Instructions for the secp256k1 signature verification program."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Sequence

from solkit.core import SECP256K1_PROGRAM_ID, Instruction

OFFSETS_SERIALIZED_SIZE = 11
DATA_START = OFFSETS_SERIALIZED_SIZE + 1

_OFFSETS_FORMAT = "<HBHBHHB"


@dataclass(frozen=True)
class SecpSignatureOffsets:
    """Where one signature, address and message sit in instruction data."""

    signature_offset: int
    signature_instruction_index: int
    eth_address_offset: int
    eth_address_instruction_index: int
    message_data_offset: int
    message_data_size: int
    message_instruction_index: int

    def to_bytes(self) -> bytes:
        try:
            return struct.pack(
                _OFFSETS_FORMAT,
                self.signature_offset,
                self.signature_instruction_index,
                self.eth_address_offset,
                self.eth_address_instruction_index,
                self.message_data_offset,
                self.message_data_size,
                self.message_instruction_index,
            )
        except struct.error as exc:
            raise ValueError(f"signature offsets out of range: {exc}") from None


def new_secp256k1_instruction(
    msgs: Sequence[bytes],
    sigs: Sequence[bytes],
    addrs: Sequence[bytes],
    this_instr_index: int,
) -> Instruction:
    """Build a verification instruction for the given messages, signatures and addresses."""
    if not len(msgs) == len(sigs) == len(addrs):
        raise ValueError("provided a different number of keys, messages, or signatures")
    count = len(msgs)
    if count > 0xFF:
        raise ValueError("at most 255 signatures fit in one instruction")

    offsets = []
    payload = bytearray()
    base = 1 + count * OFFSETS_SERIALIZED_SIZE
    for msg, sig, addr in zip(msgs, sigs, addrs):
        eth_offset = base + len(payload)
        payload += addr
        sig_offset = base + len(payload)
        payload += sig
        msg_offset = base + len(payload)
        payload += msg
        offsets.append(
            SecpSignatureOffsets(
                signature_offset=sig_offset,
                signature_instruction_index=this_instr_index,
                eth_address_offset=eth_offset,
                eth_address_instruction_index=this_instr_index,
                message_data_offset=msg_offset,
                message_data_size=len(msg),
                message_instruction_index=this_instr_index,
            )
        )

    data = bytes([count]) + b"".join(o.to_bytes() for o in offsets) + bytes(payload)
    return Instruction(program_id=SECP256K1_PROGRAM_ID, data=data)