"""
Process-wide configuration for the relay identity.

Values are read from environment variables once, at import. Command line
flags override them.

Environment Variables:
    RELAY_KEY_FILE: Identity file path (default: key.toml in the working directory)
    RELAY_LISTEN_ADDR: Multiaddr the relay listens on (default: /ip4/0.0.0.0/tcp/2468)
"""

import os
from pathlib import Path
from typing import Final

DEFAULT_KEY_FILE: Final = Path("key.toml")
"""Identity file location used when RELAY_KEY_FILE is unset."""

DEFAULT_LISTEN_ADDR: Final = "/ip4/0.0.0.0/tcp/2468"
"""Listen multiaddr used when RELAY_LISTEN_ADDR is unset."""

KEY_FILE_MODE: Final = 0o600
"""The identity file holds private key material: owner read/write only."""

_key_file = os.environ.get("RELAY_KEY_FILE", str(DEFAULT_KEY_FILE))
if not _key_file.strip():
    raise ValueError("Invalid RELAY_KEY_FILE environment variable: must not be empty")

KEY_FILE: Final = Path(_key_file)
"""Identity file path for this process."""

LISTEN_ADDR: Final = os.environ.get("RELAY_LISTEN_ADDR", DEFAULT_LISTEN_ADDR)
"""Listen multiaddr advertised next to the PeerId."""
