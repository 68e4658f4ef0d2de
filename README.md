# solkit

Build Solana program instructions and decode account data in pure Python. It uses only the
standard library.

## Modules

- `solkit.core`:
  - `PublicKey` is a frozen 32-byte key. It has `from_base58`, `to_base58` and `is_zero`.
  - `AccountMeta` and `Instruction` describe an instruction.
  - `b58encode` and `b58decode` convert to and from base58.
  - `is_on_curve` tests whether 32 bytes are a point on the ed25519 curve.
  - `create_program_address` and `find_program_address` derive program addresses.
    `find_program_address` tries bump seeds from 255 down to 1.
  - Well-known program and sysvar ids are constants, such as `SYSTEM_PROGRAM_ID`,
    `STAKE_PROGRAM_ID`, `SYSVAR_RENT_PUBKEY` and `METAPLEX_TOKEN_META_PROGRAM_ID`.
- `solkit.encoding`:
  - `BinaryWriter` and `BinaryReader` handle little-endian bincode and borsh layouts:
    integers, booleans, public keys, strings and option values.
  - `DecodeError` is raised for malformed input.
- `solkit.system`: system program instructions, with the `SystemInstruction` enum.
  - Account setup: `create_account`, `assign`, `allocate`.
  - Transfers: `transfer`.
  - Seeded variants: `create_account_with_seed`, `allocate_with_seed`, `assign_with_seed`,
    `transfer_with_seed`.
  - Nonce accounts: `advance_nonce_account`, `withdraw_nonce_account`,
    `initialize_nonce_account`, `authorize_nonce_account`, `upgrade_nonce_account`.
- `solkit.system_state`: `FeeCalculator.from_bytes` and `NonceAccount.from_bytes` decode
  nonce account data.
- `solkit.stake`: stake program instructions.
  - Functions: `initialize`, `authorize`, `delegate_stake`, `split`, `withdraw`,
    `deactivate`, `set_lockup`, `merge`, `authorize_with_seed`.
  - Types: `Lockup`, `Authorized`, `StakeAuthorizationType`, `StakeInstruction`.
- `solkit.secp256k1`: `new_secp256k1_instruction` packs messages, signatures and Ethereum
  addresses for on-chain verification, using `SecpSignatureOffsets`.
- `solkit.nameservice`:
  - `get_hash_name`, `get_name_account_key` and `get_twitter_registry_key` derive
    name-service addresses.
  - `NameRecordHeader.from_bytes` parses a record header.
- `solkit.tokenmeta`: token metadata instructions, with the `TokenMetaInstruction` enum.
  - Metadata: `create_metadata_account`, `create_metadata_account_v2`,
    `update_metadata_account`, `sign_metadata`.
  - Editions: `create_master_edition`, `create_master_edition_v3`,
    `mint_new_edition_from_master_edition_via_token`.
  - Collections: `verify_collection`, `unverify_collection`, `set_and_verify_collection`.
  - Burning: `burn_nft`.
- `solkit.tokenmeta_state`:
  - Data structures: `Data`, `DataV2`, `Creator`, `Collection`, `Uses`.
  - Enums: `Key`, `TokenStandard`, `UseMethod`.
  - `Metadata.from_bytes` decodes a metadata account. If the current layout does not
    decode, it tries the older, shorter layout. It strips trailing NUL bytes from the name,
    symbol and uri.
  - `MasterEditionV2.from_bytes` decodes a master edition account.
- `solkit.tokenmeta_utils`: `get_token_meta_pubkey`, `get_master_edition` and
  `get_edition_mark` derive metadata, master edition and edition-marker addresses.

## Install

```
pip install .
```

## Examples

A transfer:

```python
from solkit.core import PublicKey
from solkit.system import transfer

sender = PublicKey.from_base58("EvN4kgKmCmYzdbd5kL8Q8YgkUW5RoqMTpBczrfLExtx7")
receiver = PublicKey.from_base58("BkXBQ9ThbQffhmG39c2TbXW94pEmVGJAvxWk6hfxRvUJ")

ix = transfer(sender, receiver, 1)
print(ix.program_id.to_base58(), ix.data.hex())
```

The address of a `.sol` domain:

```python
from solkit.core import PublicKey
from solkit.nameservice import SOL_TLD_AUTHORITY, get_hash_name, get_name_account_key

key = get_name_account_key(get_hash_name("blocto"), PublicKey(), SOL_TLD_AUTHORITY)
print(key.to_base58())
```

Decoding a metadata account from raw account bytes you already have:

```python
from solkit.tokenmeta_state import Metadata

metadata = Metadata.from_bytes(account_data)  # account_data: bytes
print(metadata.data.name, metadata.data.uri)
```

Decoders raise `solkit.encoding.DecodeError` (a `ValueError`) when data is malformed or too
short. Builders raise `ValueError` when an integer is out of range for its field.

## What it does not do

solkit only builds instructions and decodes bytes. It does not:

- talk to an RPC node;
- build, sign or serialize transactions;
- manage keypairs or wallets.

Fetching account data and submitting instructions is left to other tools.

## Tests

```
pip install .[test]
pytest
```