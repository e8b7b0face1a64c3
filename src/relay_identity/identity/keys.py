"""
Ed25519 identity keys in libp2p wire form.

The relay identity is always an Ed25519 key pair. On the wire the keys are
wrapped in the libp2p-crypto protobuf message so that the payload names its
own algorithm:

- Public key data: the 32-byte raw public key.
- Private key data: 64 bytes, the 32-byte seed followed by the public key.
  Older libp2p releases appended the public key a second time (96 bytes);
  that form is still accepted on decode.

Only Ed25519 is supported. Any other key type is rejected rather than
interpreted.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .exceptions import GenerationFailure, UnsupportedKeyMaterial
from .protobuf import KeyProto, KeyType, ProtobufError

__all__ = [
    "KeyKind",
    "generate_keypair",
    "raw_public_bytes",
    "marshal_private_key",
    "marshal_public_key",
    "unmarshal_private_key",
    "unmarshal_public_key",
]

SEED_SIZE: Final = 32
"""Length of an Ed25519 private seed."""

PUBLIC_KEY_SIZE: Final = 32
"""Length of a raw Ed25519 public key."""


class KeyKind(Enum):
    """Which half of the key pair a text block or payload carries."""

    PRIVATE = "private"
    PUBLIC = "public"


def generate_keypair() -> tuple[Ed25519PrivateKey, Ed25519PublicKey]:
    """
    Generate a fresh Ed25519 key pair.

    Ed25519 has a single key size, so there is nothing to parameterize.

    Raises:
        GenerationFailure: If the crypto backend cannot produce a key.
    """
    try:
        private_key = Ed25519PrivateKey.generate()
    except (UnsupportedAlgorithm, InternalError, OSError) as e:
        raise GenerationFailure(f"Ed25519 key generation failed: {e}") from e
    return private_key, private_key.public_key()


def raw_public_bytes(public_key: Ed25519PublicKey) -> bytes:
    """Return the 32-byte raw public key."""
    return public_key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


def _raw_seed(private_key: Ed25519PrivateKey) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )


def marshal_public_key(public_key: Ed25519PublicKey) -> bytes:
    """Encode a public key as a libp2p PublicKey protobuf."""
    if not isinstance(public_key, Ed25519PublicKey):
        raise TypeError(f"Expected Ed25519PublicKey, got {type(public_key).__name__}")
    return KeyProto(key_type=KeyType.ED25519, key_data=raw_public_bytes(public_key)).encode()


def marshal_private_key(private_key: Ed25519PrivateKey) -> bytes:
    """Encode a private key as a libp2p PrivateKey protobuf (seed || public)."""
    if not isinstance(private_key, Ed25519PrivateKey):
        raise TypeError(f"Expected Ed25519PrivateKey, got {type(private_key).__name__}")
    data = _raw_seed(private_key) + raw_public_bytes(private_key.public_key())
    return KeyProto(key_type=KeyType.ED25519, key_data=data).encode()


def _decode_ed25519_proto(data: bytes, kind: KeyKind) -> bytes:
    """Parse the protobuf wrapper and return the Ed25519 key data."""
    try:
        proto = KeyProto.decode(data)
    except ProtobufError as e:
        raise UnsupportedKeyMaterial(kind.value, str(e)) from e

    if proto.key_type != KeyType.ED25519:
        raise UnsupportedKeyMaterial(
            kind.value, f"key type {proto.key_type.name} is not supported, expected ED25519"
        )
    return proto.key_data


def unmarshal_public_key(data: bytes) -> Ed25519PublicKey:
    """
    Decode a libp2p PublicKey protobuf.

    Raises:
        UnsupportedKeyMaterial: If the payload is not an Ed25519 public key.
    """
    key_data = _decode_ed25519_proto(data, KeyKind.PUBLIC)
    if len(key_data) != PUBLIC_KEY_SIZE:
        raise UnsupportedKeyMaterial(
            KeyKind.PUBLIC.value,
            f"expected {PUBLIC_KEY_SIZE} bytes of key data, got {len(key_data)}",
        )
    return Ed25519PublicKey.from_public_bytes(key_data)


def unmarshal_private_key(data: bytes) -> Ed25519PrivateKey:
    """
    Decode a libp2p PrivateKey protobuf.

    The embedded public key must match the one derived from the seed.

    Raises:
        UnsupportedKeyMaterial: If the payload is not a consistent Ed25519
            private key.
    """
    kind = KeyKind.PRIVATE.value
    key_data = _decode_ed25519_proto(data, KeyKind.PRIVATE)

    standard = SEED_SIZE + PUBLIC_KEY_SIZE
    if len(key_data) == standard + PUBLIC_KEY_SIZE:
        # Legacy layout: seed || public || public.
        if key_data[standard:] != key_data[SEED_SIZE:standard]:
            raise UnsupportedKeyMaterial(kind, "redundant public key copies differ")
        key_data = key_data[:standard]
    elif len(key_data) != standard:
        raise UnsupportedKeyMaterial(
            kind, f"expected {standard} bytes of key data, got {len(key_data)}"
        )

    private_key = Ed25519PrivateKey.from_private_bytes(key_data[:SEED_SIZE])
    if raw_public_bytes(private_key.public_key()) != key_data[SEED_SIZE:]:
        raise UnsupportedKeyMaterial(kind, "embedded public key does not match the seed")
    return private_key
