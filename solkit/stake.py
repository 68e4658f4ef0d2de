"""Instruction builders for the stake program."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from solkit.core import (
    STAKE_CONFIG_PUBKEY,
    STAKE_PROGRAM_ID,
    SYSVAR_CLOCK_PUBKEY,
    SYSVAR_RENT_PUBKEY,
    SYSVAR_STAKE_HISTORY_PUBKEY,
    AccountMeta,
    Instruction,
    PublicKey,
)
from solkit.encoding import BinaryWriter

ACCOUNT_SIZE = 200


class StakeInstruction(IntEnum):
    INITIALIZE = 0
    AUTHORIZE = 1
    DELEGATE_STAKE = 2
    SPLIT = 3
    WITHDRAW = 4
    DEACTIVATE = 5
    SET_LOCKUP = 6
    MERGE = 7
    AUTHORIZE_WITH_SEED = 8


class StakeAuthorizationType(IntEnum):
    STAKER = 0
    WITHDRAWER = 1


@dataclass(frozen=True)
class Lockup:
    """Conditions under which a stake account stays locked."""

    unix_timestamp: int = 0
    epoch: int = 0
    custodian: PublicKey = field(default_factory=PublicKey)


@dataclass(frozen=True)
class Authorized:
    """The keys allowed to stake and to withdraw."""

    staker: PublicKey
    withdrawer: PublicKey


def _writer(kind: StakeInstruction) -> BinaryWriter:
    return BinaryWriter().u32(kind)


def _build(writer: BinaryWriter, accounts: list[AccountMeta]) -> Instruction:
    return Instruction(
        program_id=STAKE_PROGRAM_ID, accounts=accounts, data=writer.getvalue()
    )


def _with_custodian(
    accounts: list[AccountMeta], custodian: PublicKey | None
) -> list[AccountMeta]:
    if custodian is not None:
        accounts.append(AccountMeta(custodian, is_signer=True, is_writable=False))
    return accounts


def initialize(stake: PublicKey, authorized: Authorized, lockup: Lockup) -> Instruction:
    data = (
        _writer(StakeInstruction.INITIALIZE)
        .pubkey(authorized.staker)
        .pubkey(authorized.withdrawer)
        .i64(lockup.unix_timestamp)
        .u64(lockup.epoch)
        .pubkey(lockup.custodian)
    )
    return _build(
        data,
        [
            AccountMeta(stake, is_signer=False, is_writable=True),
            AccountMeta(SYSVAR_RENT_PUBKEY, is_signer=False, is_writable=False),
        ],
    )


def authorize(
    stake: PublicKey,
    auth: PublicKey,
    new_auth: PublicKey,
    auth_type: StakeAuthorizationType,
    custodian: PublicKey | None = None,
) -> Instruction:
    data = _writer(StakeInstruction.AUTHORIZE).pubkey(new_auth).u32(auth_type)
    accounts = [
        AccountMeta(stake, is_signer=False, is_writable=True),
        AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(auth, is_signer=True, is_writable=False),
    ]
    return _build(data, _with_custodian(accounts, custodian))


def delegate_stake(stake: PublicKey, auth: PublicKey, vote: PublicKey) -> Instruction:
    return _build(
        _writer(StakeInstruction.DELEGATE_STAKE),
        [
            AccountMeta(stake, is_signer=False, is_writable=True),
            AccountMeta(vote, is_signer=False, is_writable=False),
            AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(SYSVAR_STAKE_HISTORY_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(STAKE_CONFIG_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(auth, is_signer=True, is_writable=False),
        ],
    )


def split(
    stake: PublicKey, auth: PublicKey, split_stake: PublicKey, lamports: int
) -> Instruction:
    return _build(
        _writer(StakeInstruction.SPLIT).u64(lamports),
        [
            AccountMeta(stake, is_signer=False, is_writable=True),
            AccountMeta(split_stake, is_signer=False, is_writable=True),
            AccountMeta(auth, is_signer=True, is_writable=False),
        ],
    )


def withdraw(
    stake: PublicKey,
    auth: PublicKey,
    to_account: PublicKey,
    lamports: int,
    custodian: PublicKey | None = None,
) -> Instruction:
    accounts = [
        AccountMeta(stake, is_signer=False, is_writable=True),
        AccountMeta(to_account, is_signer=False, is_writable=True),
        AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(SYSVAR_STAKE_HISTORY_PUBKEY, is_signer=False, is_writable=False),
        AccountMeta(auth, is_signer=True, is_writable=False),
    ]
    return _build(
        _writer(StakeInstruction.WITHDRAW).u64(lamports),
        _with_custodian(accounts, custodian),
    )


def deactivate(stake: PublicKey, auth: PublicKey) -> Instruction:
    return _build(
        _writer(StakeInstruction.DEACTIVATE),
        [
            AccountMeta(stake, is_signer=False, is_writable=True),
            AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(auth, is_signer=True, is_writable=False),
        ],
    )


def set_lockup(
    stake: PublicKey,
    auth: PublicKey,
    unix_timestamp: int | None = None,
    epoch: int | None = None,
    custodian: PublicKey | None = None,
) -> Instruction:
    """Change any of the lockup fields; fields left as None stay unchanged."""
    writer = _writer(StakeInstruction.SET_LOCKUP)
    writer.option(unix_timestamp, writer.i64)
    writer.option(epoch, writer.u64)
    writer.option(custodian, writer.pubkey)
    return _build(
        writer,
        [
            AccountMeta(stake, is_signer=False, is_writable=True),
            AccountMeta(auth, is_signer=True, is_writable=False),
        ],
    )


def merge(from_account: PublicKey, auth: PublicKey, to_account: PublicKey) -> Instruction:
    return _build(
        _writer(StakeInstruction.MERGE),
        [
            AccountMeta(to_account, is_signer=False, is_writable=True),
            AccountMeta(from_account, is_signer=False, is_writable=True),
            AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(SYSVAR_STAKE_HISTORY_PUBKEY, is_signer=False, is_writable=False),
            AccountMeta(auth, is_signer=True, is_writable=False),
        ],
    )


def authorize_with_seed(
    stake: PublicKey,
    auth_base: PublicKey,
    auth_seed: str,
    auth_owner: PublicKey,
    new_auth: PublicKey,
    auth_type: StakeAuthorizationType,
    custodian: PublicKey | None = None,
) -> Instruction:
    data = (
        _writer(StakeInstruction.AUTHORIZE_WITH_SEED)
        .pubkey(new_auth)
        .u32(auth_type)
        .bincode_str(auth_seed)
        .pubkey(auth_owner)
    )
    accounts = [
        AccountMeta(stake, is_signer=False, is_writable=True),
        AccountMeta(auth_base, is_signer=True, is_writable=False),
        AccountMeta(SYSVAR_CLOCK_PUBKEY, is_signer=False, is_writable=False),
    ]
    return _build(data, _with_custodian(accounts, custodian))