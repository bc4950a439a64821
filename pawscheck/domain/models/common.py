"""Defines common Value Objects used across different domain contexts.

These objects represent simple values like encoded keys, public keys,
signatures and proxy URLs, ensuring consistency and type safety.
"""

from dataclasses import dataclass
from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
PrivateKey = NewType("PrivateKey", str)      # Base58 encoded secret key, as read from pk.txt
PublicKey = NewType("PublicKey", str)        # Base58 encoded wallet address
SignatureText = NewType("SignatureText", str)  # Base58 encoded detached signature
ProxyUrl = NewType("ProxyUrl", str)          # scheme://[user:pass@]host:port
FilePath = NewType("FilePath", str)

UNKNOWN_PUBLIC_KEY = PublicKey("unknown")

# --- Resilience ---

@dataclass(frozen=True)
class RetryPolicy:
    """Value Object representing retry backoff configuration.

    Backoffs are expressed in milliseconds, like the retryOptions block of
    the configuration file.
    """
    max_retries: int = 3
    min_backoff_ms: int = 1000
    max_backoff_ms: int = 5000

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.min_backoff_ms <= 0:
            raise ValueError(f"min_backoff_ms must be > 0, got {self.min_backoff_ms}")
        if self.max_backoff_ms < self.min_backoff_ms:
            raise ValueError(
                f"max_backoff_ms ({self.max_backoff_ms}) must be >= min_backoff_ms ({self.min_backoff_ms})"
            )

@dataclass(frozen=True)
class DelayRange:
    """Inclusive range, in milliseconds, for the pause between wallets."""
    min_ms: int = 1000
    max_ms: int = 3000

    def __post_init__(self) -> None:
        if self.min_ms < 0:
            raise ValueError(f"min must be >= 0, got {self.min_ms}")
        if self.max_ms < self.min_ms:
            raise ValueError(f"max ({self.max_ms}) must be >= min ({self.min_ms})")
