"""Instruction builders for the system program."""

from __future__ import annotations

from enum import IntEnum

from solkit.core import (
    SYSTEM_PROGRAM_ID,
    SYSVAR_RECENT_BLOCKHASHES_PUBKEY,
    SYSVAR_RENT_PUBKEY,
    AccountMeta,
    Instruction,
    PublicKey,
)
from solkit.encoding import BinaryWriter


class SystemInstruction(IntEnum):
    CREATE_ACCOUNT = 0
    ASSIGN = 1
    TRANSFER = 2
    CREATE_ACCOUNT_WITH_SEED = 3
    ADVANCE_NONCE_ACCOUNT = 4
    WITHDRAW_NONCE_ACCOUNT = 5
    INITIALIZE_NONCE_ACCOUNT = 6
    AUTHORIZE_NONCE_ACCOUNT = 7
    ALLOCATE = 8
    ALLOCATE_WITH_SEED = 9
    ASSIGN_WITH_SEED = 10
    TRANSFER_WITH_SEED = 11
    UPGRADE_NONCE_ACCOUNT = 12


def _writer(kind: SystemInstruction) -> BinaryWriter:
    return BinaryWriter().u32(kind)


def _build(writer: BinaryWriter, *accounts: AccountMeta) -> Instruction:
    return Instruction(
        program_id=SYSTEM_PROGRAM_ID, accounts=accounts, data=writer.getvalue()
    )


def create_account(
    from_account: PublicKey,
    new_account: PublicKey,
    owner: PublicKey,
    lamports: int,
    space: int,
) -> Instruction:
    data = (
        _writer(SystemInstruction.CREATE_ACCOUNT)
        .u64(lamports)
        .u64(space)
        .pubkey(owner)
    )
    return _build(
        data,
        AccountMeta(from_account, is_signer=True, is_writable=True),
        AccountMeta(new_account, is_signer=True, is_writable=True),
    )


def assign(account: PublicKey, owner: PublicKey) -> Instruction:
    data = _writer(SystemInstruction.ASSIGN).pubkey(owner)
    return _build(data, AccountMeta(account, is_signer=True, is_writable=True))


def transfer(from_account: PublicKey, to_account: PublicKey, amount: int) -> Instruction:
    data = _writer(SystemInstruction.TRANSFER).u64(amount)
    return _build(
        data,
        AccountMeta(from_account, is_signer=True, is_writable=True),
        AccountMeta(to_account, is_signer=False, is_writable=True),
    )


def create_account_with_seed(
    from_account: PublicKey,
    new_account: PublicKey,
    base: PublicKey,
    owner: PublicKey,
    seed: str,
    lamports: int,
    space: int,
) -> Instruction:
    data = (
        _writer(SystemInstruction.CREATE_ACCOUNT_WITH_SEED)
        .pubkey(base)
        .bincode_str(seed)
        .u64(lamports)
        .u64(space)
        .pubkey(owner)
    )
    accounts = [
        AccountMeta(from_account, is_signer=True, is_writable=True),
        AccountMeta(new_account, is_signer=False, is_writable=True),
    ]
    if base != from_account:
        accounts.append(AccountMeta(base, is_signer=True, is_writable=False))
    return _build(data, *accounts)


def advance_nonce_account(nonce: PublicKey, auth: PublicKey) -> Instruction:
    data = _writer(SystemInstruction.ADVANCE_NONCE_ACCOUNT)
    return _build(
        data,
        AccountMeta(nonce, is_signer=False, is_writable=True),
        AccountMeta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(auth, is_signer=True, is_writable=False),
    )


def withdraw_nonce_account(
    nonce: PublicKey, auth: PublicKey, to_account: PublicKey, amount: int
) -> Instruction:
    data = _writer(SystemInstruction.WITHDRAW_NONCE_ACCOUNT).u64(amount)
    return _build(
        data,
        AccountMeta(nonce, is_signer=False, is_writable=True),
        AccountMeta(to_account, is_signer=False, is_writable=True),
        AccountMeta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(SYSVAR_RENT_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(auth, is_signer=True, is_writable=False),
    )


def initialize_nonce_account(nonce: PublicKey, auth: PublicKey) -> Instruction:
    data = _writer(SystemInstruction.INITIALIZE_NONCE_ACCOUNT).pubkey(auth)
    return _build(
        data,
        AccountMeta(nonce, is_signer=False, is_writable=True),
        AccountMeta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(SYSVAR_RENT_PUBKEY, is_signer=False, is_writable=False),
    )


def authorize_nonce_account(
    nonce: PublicKey, auth: PublicKey, new_auth: PublicKey
) -> Instruction:
    data = _writer(SystemInstruction.AUTHORIZE_NONCE_ACCOUNT).pubkey(new_auth)
    return _build(
        data,
        AccountMeta(nonce, is_signer=False, is_writable=True),
        AccountMeta(auth, is_signer=True, is_writable=False),
    )


def allocate(account: PublicKey, space: int) -> Instruction:
    data = _writer(SystemInstruction.ALLOCATE).u64(space)
    return _build(data, AccountMeta(account, is_signer=True, is_writable=True))


def allocate_with_seed(
    account: PublicKey, base: PublicKey, owner: PublicKey, seed: str, space: int
) -> Instruction:
    data = (
        _writer(SystemInstruction.ALLOCATE_WITH_SEED)
        .pubkey(base)
        .bincode_str(seed)
        .u64(space)
        .pubkey(owner)
    )
    return _build(
        data,
        AccountMeta(account, is_signer=False, is_writable=True),
        AccountMeta(base, is_signer=True, is_writable=False),
    )


def assign_with_seed(
    account: PublicKey, owner: PublicKey, base: PublicKey, seed: str
) -> Instruction:
    data = (
        _writer(SystemInstruction.ASSIGN_WITH_SEED)
        .pubkey(base)
        .bincode_str(seed)
        .pubkey(owner)
    )
    return _build(
        data,
        AccountMeta(account, is_signer=False, is_writable=True),
        AccountMeta(base, is_signer=True, is_writable=False),
    )


def transfer_with_seed(
    from_account: PublicKey,
    to_account: PublicKey,
    base: PublicKey,
    owner: PublicKey,
    seed: str,
    amount: int,
) -> Instruction:
    data = (
        _writer(SystemInstruction.TRANSFER_WITH_SEED)
        .u64(amount)
        .bincode_str(seed)
        .pubkey(owner)
    )
    return _build(
        data,
        AccountMeta(from_account, is_signer=False, is_writable=True),
        AccountMeta(base, is_signer=True, is_writable=False),
        AccountMeta(to_account, is_signer=False, is_writable=True),
    )


def upgrade_nonce_account(nonce_account: PublicKey) -> Instruction:
    data = _writer(SystemInstruction.UPGRADE_NONCE_ACCOUNT)
    return _build(data, AccountMeta(nonce_account, is_signer=False, is_writable=True))