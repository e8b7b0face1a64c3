"""
Shared pytest fixtures for relay identity tests.

Provides identity records, key file paths and a Go-written identity file.
"""

from __future__ import annotations

import base64
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from relay_identity.identity import IdentityRecord, generate_identity

GO_SEED = bytes(range(32))
"""Fixed seed used for the Go-compatible identity file."""


def armored(label: str, payload: bytes) -> str:
    """Armor a payload the way Go's encoding/pem does, for building fixtures by hand."""
    body = base64.b64encode(payload).decode("ascii")
    lines = [body[i : i + 64] for i in range(0, len(body), 64)]
    return f"-----BEGIN {label}-----\n" + "\n".join(lines) + f"\n-----END {label}-----\n"


def toml_escaped(text: str) -> str:
    """TOML basic string with escaped newlines, as go-toml v2 writes it."""
    return '"' + text.replace("\n", "\\n") + '"'


def go_key_payloads(seed: bytes = GO_SEED) -> tuple[bytes, bytes]:
    """libp2p private and public protobuf payloads for an Ed25519 seed."""
    public = (
        Ed25519PrivateKey.from_private_bytes(seed)
        .public_key()
        .public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
    )
    private_payload = b"\x08\x01\x12\x40" + seed + public
    public_payload = b"\x08\x01\x12\x20" + public
    return private_payload, public_payload


@pytest.fixture
def identity() -> IdentityRecord:
    """Freshly generated identity."""
    return generate_identity()


@pytest.fixture
def key_file(tmp_path: Path) -> Path:
    """Identity file location inside a temporary directory (not yet created)."""
    return tmp_path / "key.toml"


@pytest.fixture
def go_payloads() -> tuple[bytes, bytes]:
    """Hand-built (private, public) libp2p payloads for GO_SEED."""
    return go_key_payloads()


@pytest.fixture
def go_key_file(key_file: Path, go_payloads: tuple[bytes, bytes]) -> Path:
    """Identity file in the exact layout the Go relay writes."""
    private_payload, public_payload = go_payloads
    key_file.write_text(
        "PrivateKey = "
        + toml_escaped(armored("RSA PRIVATE KEY", private_payload))
        + "\nPublicKey = "
        + toml_escaped(armored("RSA PUBLIC KEY", public_payload))
        + "\n",
        encoding="utf-8",
    )
    key_file.chmod(0o600)
    return key_file
