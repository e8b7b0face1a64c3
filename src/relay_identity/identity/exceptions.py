"""Exception hierarchy for the identity key manager.

Every error here is fatal at startup. Nothing is retried or repaired: a node
that cannot produce its persisted identity must not come up under a new one.
"""

from __future__ import annotations

from pathlib import Path


class IdentityError(Exception):
    """
    Base exception for all identity-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class StorageError(IdentityError):
    """
    Base class for errors touching the identity file.

    Attributes:
        path: Location of the identity file.
        reason: Underlying OS error message.
    """

    def __init__(self, action: str, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot {action} identity file {path}: {reason}")


class StorageUnavailable(StorageError):
    """Raised when the identity file cannot be created or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__("write", path, reason)


class StorageReadError(StorageError):
    """
    Raised when the identity file exists but cannot be read.

    Distinct from "not found": only a missing file may trigger generation.
    """

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__("read", path, reason)


class MalformedIdentityFile(IdentityError):
    """
    Raised when the identity file is not a valid identity document.

    Attributes:
        path: Location of the identity file.
        detail: What was wrong with the document.
    """

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Malformed identity file {path}: {detail}")


class KeyEncodingError(IdentityError):
    """
    Base class for errors decoding a single key field.

    Attributes:
        kind: Which key was being decoded ("private" or "public").
        detail: Description of what went wrong.
    """

    def __init__(self, kind: str, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"Failed to decode {kind} key: {detail}")


class MalformedEncoding(KeyEncodingError):
    """Raised when key text does not contain a well-formed armored block."""


class UnsupportedKeyMaterial(KeyEncodingError):
    """Raised when an armored payload is not a recognized key."""


class KeyPairMismatch(IdentityError):
    """
    Raised when the stored public key does not belong to the stored private key.

    Attributes:
        path: Location of the identity file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Public key in {path} is not the counterpart of its private key"
        )


class GenerationFailure(IdentityError):
    """Raised when a fresh key pair cannot be generated."""
