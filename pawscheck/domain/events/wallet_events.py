"""Domain Events related to wallet checks and retries."""

from dataclasses import dataclass, field
import logging
import time
from typing import Optional

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a failed operation is scheduled for another attempt."""
    operation: str  # e.g., 'derive_keypair', 'check_eligibility'
    attempt_number: int
    delay_ms: int
    error_message: str
    wallet: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class RetriesExhausted(DomainEvent):
    """Event triggered when an operation fails on its last allowed attempt."""
    operation: str
    attempts: int
    error_type: str
    error_message: str
    wallet: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

@dataclass
class WalletChecked(DomainEvent):
    """Event triggered when a wallet pipeline produced its outcome."""
    public_key: str
    eligible: bool
    amount: float = 0
    error: Optional[str] = None
    timestamp: float = field(default_factory=time.time)

logger = logging.getLogger(__name__)

def dispatch_event(event: DomainEvent) -> None:
    """Publishes a domain event. For now events are only logged at debug level."""
    logger.debug(f"EVENT: {event}")
