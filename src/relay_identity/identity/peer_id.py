"""
PeerId derivation for the relay identity.

A libp2p PeerId names a node by its public key:

    1. Encode the public key as a libp2p PublicKey protobuf
    2. Wrap it in an identity multihash: [0x00][length][encoded key]
    3. Base58-encode the multihash for display

Keys up to 42 encoded bytes are inlined this way. An Ed25519 public key
encodes to 36 bytes, so its PeerId always starts with "12D3KooW".

References:
    - https://github.com/libp2p/specs/blob/master/peer-ids/peer-ids.md
    - https://github.com/multiformats/multihash
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from .keys import marshal_public_key

__all__ = [
    "Base58",
    "PeerId",
]


IDENTITY_MULTIHASH: Final = 0x00
"""Multihash code for 'no hashing, the digest is the data itself'."""


class Base58:
    """Bitcoin-alphabet Base58 (no 0, O, I or l)."""

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

    @classmethod
    def encode(cls, data: bytes) -> str:
        """Encode bytes. Each leading zero byte becomes a leading '1'."""
        zeros = len(data) - len(data.lstrip(b"\x00"))

        num = int.from_bytes(data, "big")
        digits: list[str] = []
        while num > 0:
            num, remainder = divmod(num, 58)
            digits.append(cls.ALPHABET[remainder])

        return cls.ALPHABET[0] * zeros + "".join(reversed(digits))


@dataclass(frozen=True, slots=True)
class PeerId:
    """
    A libp2p peer identifier.

    Attributes:
        multihash: Raw multihash bytes.
    """

    multihash: bytes

    def __str__(self) -> str:
        return Base58.encode(self.multihash)

    def __repr__(self) -> str:
        return f"PeerId({self!s})"

    @classmethod
    def from_public_key(cls, public_key: Ed25519PublicKey) -> PeerId:
        """Derive the PeerId of an Ed25519 public key."""
        encoded = marshal_public_key(public_key)
        return cls(multihash=bytes([IDENTITY_MULTIHASH, len(encoded)]) + encoded)
