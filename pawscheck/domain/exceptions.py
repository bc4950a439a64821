"""Exception taxonomy for pawscheck.

Per-wallet errors (InvalidKeyError, SigningError, TransportError) are
converted into outcomes at the wallet pipeline boundary. ConfigurationError
aborts the run. PersistenceError is logged and swallowed by the writer.
Business ineligibility ("No OG drop") is not an exception at all.
"""


class PawsCheckError(Exception):
    """Base class for all pawscheck errors."""


class ConfigurationError(PawsCheckError):
    """Configuration file missing, unreadable or invalid."""


class InvalidKeyError(PawsCheckError):
    """Encoded private key could not be decoded into a keypair."""


class SigningError(PawsCheckError):
    """Signature generation failed."""


class TransportError(PawsCheckError):
    """No response from the eligibility API, or the request could not be built."""


class PersistenceError(PawsCheckError):
    """Result files could not be written."""
