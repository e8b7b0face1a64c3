"""
Relay identity CLI entry point.

Loads the relay's persisted Ed25519 identity, creating it on first run, and
prints the address peers use to reach the relay.

Usage::

    python -m relay_identity
    python -m relay_identity --key-file /var/lib/relay/key.toml
    python -m relay_identity --listen /ip4/0.0.0.0/tcp/4001 -v

Options:
    --key-file   Identity file (default: $RELAY_KEY_FILE or key.toml)
    --listen     Listen multiaddr (default: $RELAY_LISTEN_ADDR or /ip4/0.0.0.0/tcp/2468)
    -v           Enable debug logging
    --no-color   Disable colored output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from relay_identity import config
from relay_identity.identity import IdentityError, PeerId, obtain_identity

logger = logging.getLogger(__name__)

GREEN = "\x1b[38;5;40m"
RESET = "\x1b[0m"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Plain log format with the level name highlighted by severity."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: GREEN,
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().formatMessage(record)
        # levelname is padded by the format string, so color the padded field.
        plain = record.levelname
        record.levelname = f"{color}{plain}{RESET}" + " " * max(0, 8 - len(plain))
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Send relay logs to stderr, at DEBUG when verbose and INFO otherwise."""
    level = logging.DEBUG if verbose else logging.INFO

    formatter_class = logging.Formatter if no_color else ColoredFormatter
    handler = logging.StreamHandler()
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=DATE_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)


def relay_address(listen_addr: str, peer_id: PeerId) -> str:
    """Full dialable multiaddr: the listen address plus the /p2p/ component."""
    return f"{listen_addr.rstrip('/')}/p2p/{peer_id}"


def run(key_file: Path, listen_addr: str, no_color: bool = False) -> int:
    """
    Obtain the identity and report the relay address.

    Returns:
        Process exit status: 0 on success, 1 if the identity is unusable.
    """
    try:
        _, public_key = obtain_identity(key_file)
    except IdentityError as e:
        logger.error("Failed to obtain relay identity: %s", e.message)
        return 1

    peer_id = PeerId.from_public_key(public_key)
    logger.info("Relay identity ready, peer_id=%s", peer_id)

    address = relay_address(listen_addr, peer_id)
    if not no_color:
        address = f"{GREEN}{address}{RESET}"
    print(f"Relay address: {address}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Relay node identity",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--key-file",
        type=Path,
        default=config.KEY_FILE,
        help=f"Identity file (default: {config.KEY_FILE})",
    )
    parser.add_argument(
        "--listen",
        default=config.LISTEN_ADDR,
        help=f"Listen multiaddr (default: {config.LISTEN_ADDR})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)
    sys.exit(run(args.key_file, args.listen, args.no_color))


if __name__ == "__main__":
    main()
