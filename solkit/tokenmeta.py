"""Instruction builders for the token metadata program."""

from __future__ import annotations

from enum import IntEnum

from solkit.core import (
    METAPLEX_TOKEN_META_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    SYSVAR_RENT_PUBKEY,
    TOKEN_PROGRAM_ID,
    AccountMeta,
    Instruction,
    PublicKey,
)
from solkit.encoding import BinaryWriter
from solkit.tokenmeta_state import Data, DataV2


class TokenMetaInstruction(IntEnum):
    CREATE_METADATA_ACCOUNT = 0
    UPDATE_METADATA_ACCOUNT = 1
    DEPRECATED_CREATE_MASTER_EDITION = 2
    DEPRECATED_MINT_NEW_EDITION_FROM_MASTER_EDITION_VIA_PRINTING_TOKEN = 3
    UPDATE_PRIMARY_SALE_HAPPENED_VIA_TOKEN = 4
    DEPRECATED_SET_RESERVATION_LIST = 5
    DEPRECATED_CREATE_RESERVATION_LIST = 6
    SIGN_METADATA = 7
    DEPRECATED_MINT_PRINTING_TOKENS_VIA_TOKEN = 8
    DEPRECATED_MINT_PRINTING_TOKENS = 9
    CREATE_MASTER_EDITION = 10
    MINT_NEW_EDITION_FROM_MASTER_EDITION_VIA_TOKEN = 11
    CONVERT_MASTER_EDITION_V1_TO_V2 = 12
    MINT_NEW_EDITION_FROM_MASTER_EDITION_VIA_VAULT_PROXY = 13
    PUFF_METADATA = 14
    UPDATE_METADATA_ACCOUNT_V2 = 15
    CREATE_METADATA_ACCOUNT_V2 = 16
    CREATE_MASTER_EDITION_V3 = 17
    VERIFY_COLLECTION = 18
    UTILIZE = 19
    APPROVE_USE_AUTHORITY = 20
    REVOKE_USE_AUTHORITY = 21
    UNVERIFY_COLLECTION = 22
    APPROVE_COLLECTION_AUTHORITY = 23
    REVOKE_COLLECTION_AUTHORITY = 24
    SET_AND_VERIFY_COLLECTION = 25
    FREEZE_DELEGATED_ACCOUNT = 26
    THAW_DELEGATED_ACCOUNT = 27
    REMOVE_CREATOR_VERIFICATION = 28
    BURN_NFT = 29
    RESERVED = 30
    UNVERIFY_SIZED_COLLECTION_ITEM = 31
    SET_AND_VERIFY_SIZED_COLLECTION_ITEM = 32
    CREATE_METADATA_ACCOUNT_V3 = 33
    SET_COLLECTION_SIZE = 34
    SET_TOKEN_STANDARD = 35


def _writer(kind: TokenMetaInstruction) -> BinaryWriter:
    return BinaryWriter().u8(kind)


def _build(writer: BinaryWriter, accounts: list[AccountMeta]) -> Instruction:
    return Instruction(
        program_id=METAPLEX_TOKEN_META_PROGRAM_ID,
        accounts=accounts,
        data=writer.getvalue(),
    )


def _readonly(key: PublicKey) -> AccountMeta:
    return AccountMeta(key, is_signer=False, is_writable=False)


def _create_metadata_accounts(
    metadata: PublicKey,
    mint: PublicKey,
    mint_authority: PublicKey,
    payer: PublicKey,
    update_authority: PublicKey,
    update_authority_is_signer: bool,
) -> list[AccountMeta]:
    return [
        AccountMeta(metadata, is_signer=False, is_writable=True),
        AccountMeta(mint, is_signer=False, is_writable=False),
        AccountMeta(mint_authority, is_signer=True, is_writable=False),
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(
            update_authority, is_signer=update_authority_is_signer, is_writable=False
        ),
        _readonly(SYSTEM_PROGRAM_ID),
        _readonly(SYSVAR_RENT_PUBKEY),
    ]


def create_metadata_account(
    metadata: PublicKey,
    mint: PublicKey,
    mint_authority: PublicKey,
    payer: PublicKey,
    update_authority: PublicKey,
    update_authority_is_signer: bool,
    is_mutable: bool,
    data: Data,
) -> Instruction:
    writer = _writer(TokenMetaInstruction.CREATE_METADATA_ACCOUNT)
    writer.raw(data.serialize()).boolean(is_mutable)
    return _build(
        writer,
        _create_metadata_accounts(
            metadata, mint, mint_authority, payer, update_authority,
            update_authority_is_signer,
        ),
    )


def update_metadata_account(
    metadata_account: PublicKey,
    update_authority: PublicKey,
    data: Data | None = None,
    new_update_authority: PublicKey | None = None,
    primary_sale_happened: bool | None = None,
) -> Instruction:
    """Update any of data, update authority and primary sale flag; None leaves a field unchanged."""
    writer = _writer(TokenMetaInstruction.UPDATE_METADATA_ACCOUNT)
    writer.option(data, lambda d: writer.raw(d.serialize()))
    writer.option(new_update_authority, writer.pubkey)
    writer.option(primary_sale_happened, writer.boolean)
    return _build(
        writer,
        [
            AccountMeta(metadata_account, is_signer=False, is_writable=True),
            AccountMeta(update_authority, is_signer=True, is_writable=False),
        ],
    )


def _master_edition(
    kind: TokenMetaInstruction,
    edition: PublicKey,
    mint: PublicKey,
    update_authority: PublicKey,
    mint_authority: PublicKey,
    metadata: PublicKey,
    payer: PublicKey,
    max_supply: int | None,
    metadata_writable: bool,
) -> Instruction:
    writer = _writer(kind)
    writer.option(max_supply, writer.u64)
    return _build(
        writer,
        [
            AccountMeta(edition, is_signer=False, is_writable=True),
            AccountMeta(mint, is_signer=False, is_writable=True),
            AccountMeta(update_authority, is_signer=True, is_writable=False),
            AccountMeta(mint_authority, is_signer=True, is_writable=False),
            AccountMeta(payer, is_signer=True, is_writable=True),
            AccountMeta(metadata, is_signer=False, is_writable=metadata_writable),
            _readonly(TOKEN_PROGRAM_ID),
            _readonly(SYSTEM_PROGRAM_ID),
            _readonly(SYSVAR_RENT_PUBKEY),
        ],
    )


def create_master_edition(
    edition: PublicKey,
    mint: PublicKey,
    update_authority: PublicKey,
    mint_authority: PublicKey,
    metadata: PublicKey,
    payer: PublicKey,
    max_supply: int | None = None,
) -> Instruction:
    return _master_edition(
        TokenMetaInstruction.CREATE_MASTER_EDITION,
        edition, mint, update_authority, mint_authority, metadata, payer,
        max_supply, metadata_writable=False,
    )


def create_master_edition_v3(
    edition: PublicKey,
    mint: PublicKey,
    update_authority: PublicKey,
    mint_authority: PublicKey,
    metadata: PublicKey,
    payer: PublicKey,
    max_supply: int | None = None,
) -> Instruction:
    return _master_edition(
        TokenMetaInstruction.CREATE_MASTER_EDITION_V3,
        edition, mint, update_authority, mint_authority, metadata, payer,
        max_supply, metadata_writable=True,
    )


def sign_metadata(metadata: PublicKey, creator: PublicKey) -> Instruction:
    return _build(
        _writer(TokenMetaInstruction.SIGN_METADATA),
        [
            AccountMeta(metadata, is_signer=False, is_writable=True),
            AccountMeta(creator, is_signer=True, is_writable=False),
        ],
    )


def mint_new_edition_from_master_edition_via_token(
    new_metadata: PublicKey,
    new_edition: PublicKey,
    master_edition: PublicKey,
    new_mint: PublicKey,
    edition_mark: PublicKey,
    new_mint_authority: PublicKey,
    payer: PublicKey,
    token_account_owner: PublicKey,
    token_account: PublicKey,
    new_metadata_update_authority: PublicKey,
    master_metadata: PublicKey,
    edition: int,
) -> Instruction:
    writer = _writer(TokenMetaInstruction.MINT_NEW_EDITION_FROM_MASTER_EDITION_VIA_TOKEN)
    writer.u64(edition)
    return _build(
        writer,
        [
            AccountMeta(new_metadata, is_signer=False, is_writable=True),
            AccountMeta(new_edition, is_signer=False, is_writable=True),
            AccountMeta(master_edition, is_signer=False, is_writable=True),
            AccountMeta(new_mint, is_signer=False, is_writable=True),
            AccountMeta(edition_mark, is_signer=False, is_writable=True),
            AccountMeta(new_mint_authority, is_signer=True, is_writable=False),
            AccountMeta(payer, is_signer=True, is_writable=True),
            AccountMeta(token_account_owner, is_signer=True, is_writable=False),
            _readonly(token_account),
            _readonly(new_metadata_update_authority),
            _readonly(master_metadata),
            _readonly(TOKEN_PROGRAM_ID),
            _readonly(SYSTEM_PROGRAM_ID),
            _readonly(SYSVAR_RENT_PUBKEY),
        ],
    )


def create_metadata_account_v2(
    metadata: PublicKey,
    mint: PublicKey,
    mint_authority: PublicKey,
    payer: PublicKey,
    update_authority: PublicKey,
    update_authority_is_signer: bool,
    is_mutable: bool,
    data: DataV2,
) -> Instruction:
    writer = _writer(TokenMetaInstruction.CREATE_METADATA_ACCOUNT_V2)
    writer.raw(data.serialize()).boolean(is_mutable)
    return _build(
        writer,
        _create_metadata_accounts(
            metadata, mint, mint_authority, payer, update_authority,
            update_authority_is_signer,
        ),
    )


def verify_collection(
    payer: PublicKey,
    metadata: PublicKey,
    collection_authority: PublicKey,
    collection_mint: PublicKey,
    collection: PublicKey,
    collection_master_edition_account: PublicKey,
) -> Instruction:
    return _build(
        _writer(TokenMetaInstruction.VERIFY_COLLECTION),
        [
            AccountMeta(metadata, is_signer=False, is_writable=True),
            AccountMeta(collection_authority, is_signer=True, is_writable=True),
            AccountMeta(payer, is_signer=True, is_writable=True),
            _readonly(collection_mint),
            _readonly(collection),
            _readonly(collection_master_edition_account),
        ],
    )


def unverify_collection(
    metadata: PublicKey,
    collection_authority: PublicKey,
    collection_mint: PublicKey,
    collection: PublicKey,
    collection_master_edition_account: PublicKey,
    collection_authority_record: PublicKey,
) -> Instruction:
    return _build(
        _writer(TokenMetaInstruction.UNVERIFY_COLLECTION),
        [
            AccountMeta(metadata, is_signer=False, is_writable=True),
            AccountMeta(collection_authority, is_signer=True, is_writable=True),
            _readonly(collection_mint),
            _readonly(collection),
            _readonly(collection_master_edition_account),
            _readonly(collection_authority_record),
        ],
    )


def set_and_verify_collection(
    payer: PublicKey,
    metadata: PublicKey,
    collection_authority: PublicKey,
    update_authority: PublicKey,
    collection_mint: PublicKey,
    collection: PublicKey,
    collection_master_edition_account: PublicKey,
    collection_authority_record: PublicKey | None = None,
) -> Instruction:
    """Set and verify a collection; the authority record is added unless absent or all zeros."""
    accounts = [
        AccountMeta(metadata, is_signer=False, is_writable=True),
        AccountMeta(collection_authority, is_signer=True, is_writable=True),
        AccountMeta(payer, is_signer=True, is_writable=True),
        _readonly(update_authority),
        _readonly(collection_mint),
        _readonly(collection),
        _readonly(collection_master_edition_account),
    ]
    if collection_authority_record is not None and not collection_authority_record.is_zero():
        accounts.append(_readonly(collection_authority_record))
    return _build(_writer(TokenMetaInstruction.SET_AND_VERIFY_COLLECTION), accounts)


def burn_nft(
    metadata: PublicKey,
    owner: PublicKey,
    mint: PublicKey,
    token_account: PublicKey,
    master_edition_account: PublicKey,
    spl_token_program: PublicKey,
    collection_metadata: PublicKey,
) -> Instruction:
    return _build(
        _writer(TokenMetaInstruction.BURN_NFT),
        [
            AccountMeta(metadata, is_signer=False, is_writable=True),
            AccountMeta(owner, is_signer=True, is_writable=True),
            AccountMeta(mint, is_signer=False, is_writable=True),
            AccountMeta(token_account, is_signer=False, is_writable=True),
            AccountMeta(master_edition_account, is_signer=False, is_writable=True),
            _readonly(spl_token_program),
            AccountMeta(collection_metadata, is_signer=False, is_writable=True),
        ],
    )