"""Persistent libp2p identity for relay nodes."""
