"""
Identity key manager for a libp2p relay node.

Keeps the node's Ed25519 key pair in a TOML file so the relay presents the
same PeerId across restarts. The first start generates and stores the pair;
every later start loads it.

The key pair is returned as a plain value for the caller to hand to its
networking layer. Nothing here holds process-wide state.
"""

from .exceptions import (
    GenerationFailure,
    IdentityError,
    KeyPairMismatch,
    MalformedEncoding,
    MalformedIdentityFile,
    StorageReadError,
    StorageUnavailable,
    UnsupportedKeyMaterial,
)
from .keys import KeyKind
from .peer_id import PeerId
from .record import (
    IdentityDocument,
    IdentityRecord,
    decode_text_to_key,
    encode_key_to_text,
    generate_identity,
)
from .store import load_identity, obtain_identity, persist_identity

__all__ = [
    # Operations
    "obtain_identity",
    "load_identity",
    "persist_identity",
    "generate_identity",
    "encode_key_to_text",
    "decode_text_to_key",
    # Types
    "IdentityRecord",
    "IdentityDocument",
    "KeyKind",
    "PeerId",
    # Errors
    "IdentityError",
    "StorageUnavailable",
    "StorageReadError",
    "MalformedIdentityFile",
    "MalformedEncoding",
    "UnsupportedKeyMaterial",
    "KeyPairMismatch",
    "GenerationFailure",
]
