"""Solana key handling and message signing."""
