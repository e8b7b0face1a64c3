"""
libp2p-crypto key messages in protobuf wire format.

libp2p serializes keys as a tiny protobuf message (crypto.proto)::

    message PublicKey {
        required KeyType Type = 1;   // Field 1, varint
        required bytes Data = 2;     // Field 2, length-delimited
    }

    message PrivateKey {
        required KeyType Type = 1;
        required bytes Data = 2;
    }

Both messages share the same layout, so one codec serves both::

    [0x08][type varint][0x12][length varint][key bytes]

    - 0x08 = (1 << 3) | 0, field 1 with wire type 0 (varint)
    - 0x12 = (2 << 3) | 2, field 2 with wire type 2 (length-delimited)

Encoding is deterministic: fields in tag order, minimal varints, both fields
present. Decoding accepts fields in any order but rejects duplicates,
unknown wire types and truncated input.

Varints are unsigned LEB128: 7 data bits per byte, MSB set on every byte
except the last, low-order group first. A 64-bit value needs at most 10 bytes.

References:
    - https://github.com/libp2p/go-libp2p/blob/master/core/crypto/pb/crypto.proto
    - https://protobuf.dev/programming-guides/encoding/
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

__all__ = [
    "KeyType",
    "KeyProto",
    "ProtobufError",
    "VarintError",
    "encode_varint",
    "decode_varint",
]

_MAX_VARINT_SHIFT: Final = 70
"""Ten 7-bit groups. Anything longer cannot be a 64-bit value."""


class ProtobufError(Exception):
    """Raised when a key message cannot be decoded."""


class VarintError(ProtobufError):
    """Raised when varint encoding or decoding fails."""


class KeyType(IntEnum):
    """Key algorithm codes from the crypto.proto KeyType enum."""

    RSA = 0
    ED25519 = 1
    SECP256K1 = 2
    ECDSA = 3


class _WireType(IntEnum):
    VARINT = 0
    LENGTH_DELIMITED = 2


_FIELD_TYPE: Final = 1
_FIELD_DATA: Final = 2


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as an unsigned LEB128 varint.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a varint starting at offset.

    Returns:
        Tuple of (value, bytes_consumed).

    Raises:
        VarintError: If the input ends mid-varint or runs past 10 bytes.
    """
    value = 0
    shift = 0
    pos = offset

    while True:
        if pos >= len(data):
            raise VarintError("Truncated varint")

        byte = data[pos]
        pos += 1
        value |= (byte & 0x7F) << shift
        shift += 7

        if not byte & 0x80:
            return value, pos - offset

        if shift >= _MAX_VARINT_SHIFT:
            raise VarintError("Varint too long")


def _tag(field: int, wire_type: _WireType) -> bytes:
    return encode_varint((field << 3) | wire_type)


@dataclass(frozen=True, slots=True)
class KeyProto:
    """
    A libp2p PublicKey or PrivateKey message.

    Attributes:
        key_type: Algorithm of the key.
        key_data: Algorithm-specific raw key bytes.
    """

    key_type: KeyType
    """Key algorithm type."""

    key_data: bytes
    """Raw key bytes."""

    def encode(self) -> bytes:
        """Encode as deterministic protobuf bytes."""
        return (
            _tag(_FIELD_TYPE, _WireType.VARINT)
            + encode_varint(self.key_type)
            + _tag(_FIELD_DATA, _WireType.LENGTH_DELIMITED)
            + encode_varint(len(self.key_data))
            + self.key_data
        )

    @classmethod
    def decode(cls, data: bytes) -> KeyProto:
        """
        Decode a key message.

        Raises:
            ProtobufError: If the bytes are not a complete, well-formed message
                with a known key type.
        """
        key_type: int | None = None
        key_data: bytes | None = None

        offset = 0
        while offset < len(data):
            tag, consumed = decode_varint(data, offset)
            offset += consumed
            field, wire_type = tag >> 3, tag & 0x07

            if field == _FIELD_TYPE and wire_type == _WireType.VARINT:
                if key_type is not None:
                    raise ProtobufError("Duplicate Type field")
                key_type, consumed = decode_varint(data, offset)
                offset += consumed
            elif field == _FIELD_DATA and wire_type == _WireType.LENGTH_DELIMITED:
                if key_data is not None:
                    raise ProtobufError("Duplicate Data field")
                length, consumed = decode_varint(data, offset)
                offset += consumed
                if offset + length > len(data):
                    raise ProtobufError(
                        f"Data field declares {length} bytes, only {len(data) - offset} remain"
                    )
                key_data = data[offset : offset + length]
                offset += length
            else:
                raise ProtobufError(f"Unexpected field {field} with wire type {wire_type}")

        if key_type is None:
            raise ProtobufError("Missing Type field")
        if key_data is None:
            raise ProtobufError("Missing Data field")

        try:
            resolved = KeyType(key_type)
        except ValueError:
            raise ProtobufError(f"Unknown key type {key_type}") from None

        return cls(key_type=resolved, key_data=key_data)
