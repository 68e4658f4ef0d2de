import pytest

from solkit import system
from solkit.core import (
    STAKE_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RECENT_BLOCKHASHES_PUBKEY,
    SYSVAR_RENT_PUBKEY,
    AccountMeta,
    Instruction,
    PublicKey,
)

EVN4 = PublicKey.from_base58("EvN4kgKmCmYzdbd5kL8Q8YgkUW5RoqMTpBczrfLExtx7")
BKXB = PublicKey.from_base58("BkXBQ9ThbQffhmG39c2TbXW94pEmVGJAvxWk6hfxRvUJ")
FTVD = PublicKey.from_base58("FtvD2ymcAFh59DGGmJkANyJzEpLDR1GLgqDrUxfe2dPm")
DTA7 = PublicKey.from_base58("DTA7FmUNYuQs2mScj2Lx8gQV63SEL1zGtzCSvPxtijbi")

EVN4_BYTES = [
    206, 211, 135, 230, 195, 111, 87, 254, 147, 239, 143, 81, 110, 159, 49, 140,
    109, 137, 224, 197, 24, 49, 223, 61, 123, 8, 78, 109, 110, 136, 228, 240,
]
BKXB_BYTES = [
    159, 186, 247, 199, 172, 215, 195, 31, 127, 42, 207, 18, 192, 64, 156, 59,
    98, 1, 180, 8, 69, 70, 199, 127, 220, 159, 6, 40, 64, 117, 246, 19,
]
STAKE_BYTES = [
    6, 161, 216, 23, 145, 55, 84, 42, 152, 52, 55, 189, 254, 42, 122, 178,
    85, 127, 83, 92, 138, 120, 114, 43, 104, 164, 157, 192, 0, 0, 0, 0,
]
ZERO_KEY_BYTES = [0] * 32


def meta(key, signer, writable):
    return AccountMeta(key, is_signer=signer, is_writable=writable)


def test_key_byte_fixtures_match_base58():
    assert bytes(EVN4) == bytes(EVN4_BYTES)
    assert bytes(BKXB) == bytes(BKXB_BYTES)
    assert bytes(STAKE_PROGRAM_ID) == bytes(STAKE_BYTES)


def test_create_account():
    got = system.create_account(EVN4, BKXB, STAKE_PROGRAM_ID, 1, 200)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(EVN4, True, True), meta(BKXB, True, True)),
        data=bytes([0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 200, 0, 0, 0, 0, 0, 0, 0] + STAKE_BYTES),
    )


def test_assign():
    got = system.assign(BKXB, STAKE_PROGRAM_ID)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(BKXB, True, True),),
        data=bytes([1, 0, 0, 0] + STAKE_BYTES),
    )


def test_transfer():
    got = system.transfer(EVN4, BKXB, 1)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(EVN4, True, True), meta(BKXB, False, True)),
        data=bytes([2, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0]),
    )


def test_create_account_with_seed_same_base():
    got = system.create_account_with_seed(EVN4, DTA7, EVN4, SYSTEM_PROGRAM_ID, "0", 0, 0)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(EVN4, True, True), meta(DTA7, False, True)),
        data=bytes(
            [3, 0, 0, 0] + EVN4_BYTES + [1, 0, 0, 0, 0, 0, 0, 0, 48]
            + [0] * 16 + ZERO_KEY_BYTES
        ),
    )


def test_create_account_with_seed_distinct_base():
    got = system.create_account_with_seed(EVN4, FTVD, BKXB, SYSTEM_PROGRAM_ID, "0", 0, 0)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(EVN4, True, True), meta(FTVD, False, True), meta(BKXB, True, False)),
        data=bytes(
            [3, 0, 0, 0] + BKXB_BYTES + [1, 0, 0, 0, 0, 0, 0, 0, 48]
            + [0] * 16 + ZERO_KEY_BYTES
        ),
    )


def test_advance_nonce_account():
    got = system.advance_nonce_account(BKXB, EVN4)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            meta(BKXB, False, True),
            meta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, False, False),
            meta(EVN4, True, False),
        ),
        data=bytes([4, 0, 0, 0]),
    )


def test_withdraw_nonce_account():
    got = system.withdraw_nonce_account(FTVD, BKXB, EVN4, 1)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            meta(FTVD, False, True),
            meta(EVN4, False, True),
            meta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, False, False),
            meta(SYSVAR_RENT_PUBKEY, False, False),
            meta(BKXB, True, False),
        ),
        data=bytes([5, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0]),
    )


def test_initialize_nonce_account():
    got = system.initialize_nonce_account(BKXB, EVN4)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(
            meta(BKXB, False, True),
            meta(SYSVAR_RECENT_BLOCKHASHES_PUBKEY, False, False),
            meta(SYSVAR_RENT_PUBKEY, False, False),
        ),
        data=bytes([6, 0, 0, 0] + EVN4_BYTES),
    )


def test_authorize_nonce_account():
    got = system.authorize_nonce_account(FTVD, BKXB, EVN4)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(FTVD, False, True), meta(BKXB, True, False)),
        data=bytes([7, 0, 0, 0] + EVN4_BYTES),
    )


def test_allocate():
    got = system.allocate(BKXB, 500)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(BKXB, True, True),),
        data=bytes([8, 0, 0, 0, 244, 1, 0, 0, 0, 0, 0, 0]),
    )


def test_allocate_with_seed():
    got = system.allocate_with_seed(FTVD, BKXB, SYSTEM_PROGRAM_ID, "0", 256)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(FTVD, False, True), meta(BKXB, True, False)),
        data=bytes(
            [9, 0, 0, 0] + BKXB_BYTES + [1, 0, 0, 0, 0, 0, 0, 0, 48]
            + [0, 1, 0, 0, 0, 0, 0, 0] + ZERO_KEY_BYTES
        ),
    )


def test_assign_with_seed():
    got = system.assign_with_seed(FTVD, STAKE_PROGRAM_ID, BKXB, "0")
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(FTVD, False, True), meta(BKXB, True, False)),
        data=bytes(
            [10, 0, 0, 0] + BKXB_BYTES + [1, 0, 0, 0, 0, 0, 0, 0, 48] + STAKE_BYTES
        ),
    )


def test_transfer_with_seed():
    got = system.transfer_with_seed(FTVD, EVN4, BKXB, SYSTEM_PROGRAM_ID, "0", 99999)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(FTVD, False, True), meta(BKXB, True, False), meta(EVN4, False, True)),
        data=bytes(
            [11, 0, 0, 0, 159, 134, 1, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 48]
            + ZERO_KEY_BYTES
        ),
    )


def test_upgrade_nonce_account():
    got = system.upgrade_nonce_account(BKXB)
    assert got == Instruction(
        program_id=SYSTEM_PROGRAM_ID,
        accounts=(meta(BKXB, False, True),),
        data=bytes([12, 0, 0, 0]),
    )


@pytest.mark.parametrize("amount", [-1, 2**64])
def test_transfer_rejects_out_of_range_amount(amount):
    with pytest.raises(ValueError):
        system.transfer(EVN4, BKXB, amount)


def test_instruction_tags_are_sequential():
    built = [
        system.create_account(EVN4, BKXB, STAKE_PROGRAM_ID, 1, 200),
        system.assign(BKXB, STAKE_PROGRAM_ID),
        system.transfer(EVN4, BKXB, 1),
        system.create_account_with_seed(EVN4, DTA7, EVN4, SYSTEM_PROGRAM_ID, "0", 0, 0),
        system.advance_nonce_account(BKXB, EVN4),
        system.withdraw_nonce_account(FTVD, BKXB, EVN4, 1),
        system.initialize_nonce_account(BKXB, EVN4),
        system.authorize_nonce_account(FTVD, BKXB, EVN4),
        system.allocate(BKXB, 500),
        system.allocate_with_seed(FTVD, BKXB, SYSTEM_PROGRAM_ID, "0", 256),
        system.assign_with_seed(FTVD, STAKE_PROGRAM_ID, BKXB, "0"),
        system.transfer_with_seed(FTVD, EVN4, BKXB, SYSTEM_PROGRAM_ID, "0", 99999),
        system.upgrade_nonce_account(BKXB),
    ]
    tags = [int.from_bytes(ix.data[:4], "little") for ix in built]
    assert tags == list(range(13))
    assert tags == [int(kind) for kind in system.SystemInstruction]