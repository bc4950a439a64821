"""Domain models for a single wallet check.

Includes the wallet itself, the signed attestation sent to the API, the
API classification and the final per-wallet outcome.
"""

from dataclasses import dataclass
from typing import Generic, Iterable, Optional, TypeVar, Union

from .common import PrivateKey, PublicKey, SignatureText, UNKNOWN_PUBLIC_KEY

T = TypeVar("T")

Amount = Union[int, float]

@dataclass(frozen=True)
class Wallet:
    """One line of pk.txt. The public key is derived later by the signer."""
    index: int
    private_key: PrivateKey

@dataclass(frozen=True)
class SignedAttestation:
    """Detached signature over the configured message, plus the signer's address."""
    signature: SignatureText
    public_key: PublicKey

@dataclass(frozen=True)
class EligibilityResult:
    """Classification of one eligibility API exchange."""
    eligible: bool
    amount: Amount = 0
    error: Optional[str] = None

@dataclass(frozen=True)
class EligibilityOutcome:
    """Final result for one wallet, as written to the result files."""
    public_key: PublicKey
    eligible: bool
    private_key: PrivateKey
    amount: Amount = 0
    error: Optional[str] = None

    @classmethod
    def from_result(cls, wallet: Wallet, public_key: PublicKey, result: EligibilityResult) -> "EligibilityOutcome":
        return cls(
            public_key=public_key,
            eligible=result.eligible,
            private_key=wallet.private_key,
            amount=result.amount if result.eligible else 0,
            error=result.error,
        )

    @classmethod
    def failed(cls, wallet: Wallet, error: str, public_key: PublicKey = UNKNOWN_PUBLIC_KEY) -> "EligibilityOutcome":
        return cls(public_key=public_key, eligible=False, private_key=wallet.private_key, error=error)

@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Success/failure variant returned by each wallet pipeline stage."""
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StageResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "StageResult[T]":
        return cls(error=error)

@dataclass(frozen=True)
class RunSummary:
    """Aggregate counts printed at the end of a run."""
    total: int
    eligible: int
    ineligible: int
    total_amount: Amount

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[EligibilityOutcome]) -> "RunSummary":
        outcomes = list(outcomes)
        eligible = sum(1 for o in outcomes if o.eligible)
        return cls(
            total=len(outcomes),
            eligible=eligible,
            ineligible=len(outcomes) - eligible,
            total_amount=sum(o.amount or 0 for o in outcomes),
        )
