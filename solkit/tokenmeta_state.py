"""Account layouts and data structures of the token metadata program."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import TypeVar

from solkit.core import PublicKey
from solkit.encoding import BinaryReader, BinaryWriter, DecodeError

EDITION_MARKER_BIT_SIZE = 248

_E = TypeVar("_E", bound=IntEnum)


class Key(IntEnum):
    UNINITIALIZED = 0
    EDITION_V1 = 1
    MASTER_EDITION_V1 = 2
    RESERVATION_LIST_V1 = 3
    METADATA_V1 = 4
    RESERVATION_LIST_V2 = 5
    MASTER_EDITION_V2 = 6
    EDITION_MARKER = 7
    USE_AUTHORITY_RECORD = 8
    COLLECTION_AUTHORITY_RECORD = 9


class TokenStandard(IntEnum):
    NON_FUNGIBLE = 0
    FUNGIBLE_ASSET = 1
    FUNGIBLE = 2
    NON_FUNGIBLE_EDITION = 3


class UseMethod(IntEnum):
    BURN = 0
    MULTIPLE = 1
    SINGLE = 2


def _read_enum(reader: BinaryReader, enum_cls: type[_E]) -> _E:
    value = reader.u8()
    try:
        return enum_cls(value)
    except ValueError:
        raise DecodeError(f"invalid {enum_cls.__name__} value {value}") from None


@dataclass(frozen=True)
class Creator:
    """A creator credited on a token, with its share of royalties."""

    address: PublicKey
    verified: bool
    share: int

    def _write(self, writer: BinaryWriter) -> None:
        writer.pubkey(self.address).boolean(self.verified).u8(self.share)

    @classmethod
    def _read(cls, reader: BinaryReader) -> Creator:
        return cls(address=reader.pubkey(), verified=reader.boolean(), share=reader.u8())


@dataclass(frozen=True)
class Collection:
    """The collection a token belongs to."""

    verified: bool
    key: PublicKey

    def _write(self, writer: BinaryWriter) -> None:
        writer.boolean(self.verified).pubkey(self.key)

    @classmethod
    def _read(cls, reader: BinaryReader) -> Collection:
        return cls(verified=reader.boolean(), key=reader.pubkey())


@dataclass(frozen=True)
class Uses:
    """How often a token may be used, and how."""

    use_method: UseMethod
    remaining: int
    total: int

    def _write(self, writer: BinaryWriter) -> None:
        writer.u8(self.use_method).u64(self.remaining).u64(self.total)

    @classmethod
    def _read(cls, reader: BinaryReader) -> Uses:
        return cls(
            use_method=_read_enum(reader, UseMethod),
            remaining=reader.u64(),
            total=reader.u64(),
        )


@dataclass(frozen=True)
class CollectionDetails:
    """Details of a sized collection (the only known variant, V1)."""

    size: int

    @classmethod
    def _read(cls, reader: BinaryReader) -> CollectionDetails:
        variant = reader.u8()
        if variant != 0:
            raise DecodeError(f"unknown collection details variant {variant}")
        return cls(size=reader.u64())


def _write_creators(writer: BinaryWriter, creators: tuple[Creator, ...]) -> None:
    writer.u32(len(creators))
    for creator in creators:
        creator._write(writer)


def _read_creators(reader: BinaryReader) -> tuple[Creator, ...]:
    count = reader.u32()
    return tuple(Creator._read(reader) for _ in range(count))


@dataclass(frozen=True)
class Data:
    """Name, symbol, uri, royalty and creators of a token."""

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: tuple[Creator, ...] | None = None

    def __post_init__(self) -> None:
        if self.creators is not None:
            object.__setattr__(self, "creators", tuple(self.creators))

    def _write(self, writer: BinaryWriter) -> None:
        writer.borsh_str(self.name).borsh_str(self.symbol).borsh_str(self.uri)
        writer.u16(self.seller_fee_basis_points)
        writer.option(self.creators, lambda cs: _write_creators(writer, cs))

    def serialize(self) -> bytes:
        writer = BinaryWriter()
        self._write(writer)
        return writer.getvalue()

    @classmethod
    def _read(cls, reader: BinaryReader) -> Data:
        return cls(
            name=reader.borsh_str(),
            symbol=reader.borsh_str(),
            uri=reader.borsh_str(),
            seller_fee_basis_points=reader.u16(),
            creators=reader.option(lambda: _read_creators(reader)),
        )


@dataclass(frozen=True)
class DataV2:
    """Token data with optional collection and uses."""

    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: tuple[Creator, ...] | None = None
    collection: Collection | None = None
    uses: Uses | None = None

    def __post_init__(self) -> None:
        if self.creators is not None:
            object.__setattr__(self, "creators", tuple(self.creators))

    def serialize(self) -> bytes:
        writer = BinaryWriter()
        writer.borsh_str(self.name).borsh_str(self.symbol).borsh_str(self.uri)
        writer.u16(self.seller_fee_basis_points)
        writer.option(self.creators, lambda cs: _write_creators(writer, cs))
        writer.option(self.collection, lambda c: c._write(writer))
        writer.option(self.uses, lambda u: u._write(writer))
        return writer.getvalue()


@dataclass(frozen=True)
class Metadata:
    """The contents of a token metadata account."""

    key: Key
    update_authority: PublicKey
    mint: PublicKey
    data: Data
    primary_sale_happened: bool
    is_mutable: bool
    edition_nonce: int | None = None
    token_standard: TokenStandard | None = None
    collection: Collection | None = None
    uses: Uses | None = None
    collection_details: CollectionDetails | None = None

    @classmethod
    def _parse(cls, raw: bytes, extended: bool) -> Metadata:
        reader = BinaryReader(raw)
        fields = dict(
            key=_read_enum(reader, Key),
            update_authority=reader.pubkey(),
            mint=reader.pubkey(),
            data=Data._read(reader),
            primary_sale_happened=reader.boolean(),
            is_mutable=reader.boolean(),
            edition_nonce=reader.option(reader.u8),
        )
        if extended:
            fields.update(
                token_standard=reader.option(lambda: _read_enum(reader, TokenStandard)),
                collection=reader.option(lambda: Collection._read(reader)),
                uses=reader.option(lambda: Uses._read(reader)),
                collection_details=reader.option(
                    lambda: CollectionDetails._read(reader)
                ),
            )
        return cls(**fields)

    @classmethod
    def from_bytes(cls, data: bytes) -> Metadata:
        """Decode a metadata account, falling back to the older, shorter layout."""
        raw = bytes(data)
        try:
            metadata = cls._parse(raw, extended=True)
        except DecodeError:
            try:
                metadata = cls._parse(raw, extended=False)
            except DecodeError as exc:
                raise DecodeError(f"failed to deserialize data, err: {exc}") from exc
        trimmed = replace(
            metadata.data,
            name=metadata.data.name.rstrip("\x00"),
            symbol=metadata.data.symbol.rstrip("\x00"),
            uri=metadata.data.uri.rstrip("\x00"),
        )
        return replace(metadata, data=trimmed)


@dataclass(frozen=True)
class MasterEditionV2:
    """The master edition account of a printable token."""

    key: Key
    supply: int
    max_supply: int | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> MasterEditionV2:
        reader = BinaryReader(data)
        return cls(
            key=_read_enum(reader, Key),
            supply=reader.u64(),
            max_supply=reader.option(reader.u64),
        )