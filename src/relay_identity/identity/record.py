"""
The identity record and its text encoding.

An identity is held in two shapes:

- IdentityDocument: what sits on disk, two armored text fields.
- IdentityRecord: the document plus the decoded key objects the networking
  layer consumes.

The key objects are rebuilt from text on every load; only the armored text is
ever written out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final, Literal, overload

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from .armor import ArmorError, armor, dearmor
from .exceptions import MalformedEncoding
from .keys import (
    KeyKind,
    generate_keypair,
    marshal_private_key,
    marshal_public_key,
    unmarshal_private_key,
    unmarshal_public_key,
)
from .peer_id import PeerId

__all__ = [
    "ARMOR_LABELS",
    "IdentityDocument",
    "IdentityRecord",
    "decode_text_to_key",
    "encode_key_to_text",
    "generate_identity",
]

logger = logging.getLogger(__name__)

ARMOR_LABELS: Final[dict[KeyKind, str]] = {
    KeyKind.PRIVATE: "RSA PRIVATE KEY",
    KeyKind.PUBLIC: "RSA PUBLIC KEY",
}
"""
Armor labels per key kind.

Cosmetic. Existing identity files use these exact strings, but the payload is
an Ed25519 libp2p key, not RSA.
"""


class IdentityDocument(BaseModel):
    """
    On-disk identity document.

    Field names map to the PascalCase keys of the TOML file. Unknown keys are
    ignored; both known keys are required.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        extra="ignore",
        frozen=True,
        strict=True,
    )

    private_key: str = Field(repr=False)
    """Armored private key (TOML key "PrivateKey")."""

    public_key: str
    """Armored public key (TOML key "PublicKey")."""


def encode_key_to_text(key: Ed25519PrivateKey | Ed25519PublicKey, kind: KeyKind) -> str:
    """
    Marshal a key and wrap it in an armored block labelled for its kind.

    Deterministic: the same key always yields the same text.

    Raises:
        TypeError: If the key object does not match kind.
    """
    if kind is KeyKind.PRIVATE:
        if not isinstance(key, Ed25519PrivateKey):
            raise TypeError(f"Expected a private key, got {type(key).__name__}")
        payload = marshal_private_key(key)
    else:
        if not isinstance(key, Ed25519PublicKey):
            raise TypeError(f"Expected a public key, got {type(key).__name__}")
        payload = marshal_public_key(key)
    return armor(payload, ARMOR_LABELS[kind])


@overload
def decode_text_to_key(text: str, kind: Literal[KeyKind.PRIVATE]) -> Ed25519PrivateKey: ...
@overload
def decode_text_to_key(text: str, kind: Literal[KeyKind.PUBLIC]) -> Ed25519PublicKey: ...


def decode_text_to_key(text: str, kind: KeyKind) -> Ed25519PrivateKey | Ed25519PublicKey:
    """
    Parse an armored block and rebuild the key it carries.

    Raises:
        MalformedEncoding: If the text holds no well-formed armored block.
        UnsupportedKeyMaterial: If the payload is not a recognized key.
    """
    try:
        block = dearmor(text)
    except ArmorError as e:
        raise MalformedEncoding(kind.value, str(e)) from e

    if block.label != ARMOR_LABELS[kind]:
        logger.warning(
            "Unexpected armor label %r on %s key, decoding payload anyway",
            block.label,
            kind.value,
        )

    if kind is KeyKind.PRIVATE:
        return unmarshal_private_key(block.payload)
    return unmarshal_public_key(block.payload)


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    """
    A node identity in both text and decoded form.

    The private text and key object are left out of repr so a record can be
    logged or printed in a traceback without leaking key material.
    """

    private_key_text: str = field(repr=False)
    """Armored private key."""

    public_key_text: str
    """Armored public key."""

    private_key: Ed25519PrivateKey = field(repr=False)
    """Decoded private key."""

    public_key: Ed25519PublicKey
    """Decoded public key."""

    def peer_id(self) -> PeerId:
        """PeerId this identity presents on the network."""
        return PeerId.from_public_key(self.public_key)

    def to_document(self) -> IdentityDocument:
        """Text fields only, ready to be written to disk."""
        return IdentityDocument.model_validate(
            {"PrivateKey": self.private_key_text, "PublicKey": self.public_key_text}
        )


def generate_identity() -> IdentityRecord:
    """
    Create a brand-new identity.

    The key objects come straight from generation; no decode round trip.

    Raises:
        GenerationFailure: If the key pair cannot be generated.
    """
    private_key, public_key = generate_keypair()
    return IdentityRecord(
        private_key_text=encode_key_to_text(private_key, KeyKind.PRIVATE),
        public_key_text=encode_key_to_text(public_key, KeyKind.PUBLIC),
        private_key=private_key,
        public_key=public_key,
    )
