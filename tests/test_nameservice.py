import pytest

from solkit.core import PublicKey
from solkit.nameservice import (
    SOL_TLD_AUTHORITY,
    NameRecordHeader,
    get_hash_name,
    get_name_account_key,
    get_twitter_registry_key,
)

PARENT_BYTES = bytes.fromhex(
    "3d53c24b38360ed3813a23dfb2dfd820ab5821cb7929a38d2eaab252e8382595"
)
OWNER_BYTES = bytes.fromhex(
    "587f6a3dab65e73e12de67bc31732da04eeafb1283dd2110825ccb1edf79a2b0"
)
PAYLOAD = b"Reach out to owner@example.com for a sale" + bytes(6)


def test_name_record_header_too_short():
    with pytest.raises(ValueError):
        NameRecordHeader.from_bytes(bytes([0x3D, 0x53, 0xC2, 0x4B]))


def test_name_record_header_from_bytes():
    header = NameRecordHeader.from_bytes(PARENT_BYTES + OWNER_BYTES + bytes(32) + PAYLOAD)
    assert header == NameRecordHeader(
        parent_name=PublicKey.from_base58("58PwtjSDuFHuUkYjH9BYnnQKHfwo9reZhC2zMJv9JPkx"),
        owner=PublicKey.from_base58("6xTZhtNA8aaipc2hHFP616gFvDcvWmYMGsDFHwrsF3m1"),
        name_class=PublicKey(),
        data=PAYLOAD,
    )


def test_name_record_header_exact_size_has_empty_data():
    header = NameRecordHeader.from_bytes(PARENT_BYTES + OWNER_BYTES + bytes(32))
    assert header.data == b""


def test_get_twitter_registry_key():
    assert get_twitter_registry_key("gghost07114721") == PublicKey.from_base58(
        "5r2pKbCFibGZp18u51tcvzQpsNsA98TyCF1UbDmbSUk5"
    )


def test_get_hash_name():
    assert get_hash_name("blocto") == bytes(
        [0x62, 0x94, 0x3A, 0xC2, 0x9E, 0x7B, 0x9D, 0x4E, 0x38, 0x53, 0xB2, 0x84,
         0xDD, 0x7F, 0x1, 0x66, 0xEB, 0x5F, 0x0, 0xE3, 0x1F, 0x25, 0x53, 0x51,
         0x83, 0x61, 0x38, 0x33, 0xCD, 0xC5, 0xF9, 0x3]
    )


def test_get_name_account_key_domain():
    key = get_name_account_key(get_hash_name("blocto"), PublicKey(), SOL_TLD_AUTHORITY)
    assert key == PublicKey.from_base58("6yAP2rFW7wQiqVmySE4DTfQSWmp6fR1geGyWx6SQMAhS")


def test_get_name_account_key_subdomain():
    parent = get_name_account_key(get_hash_name("blocto"), PublicKey(), SOL_TLD_AUTHORITY)
    key = get_name_account_key(get_hash_name("\x00yihau"), PublicKey(), parent)
    assert key == PublicKey.from_base58("5Cjg2Xah4Cc24yM7zsfbyBuXKZ6Wm9ZJqHa5n47vnvNz")