"""Interface for wallet key handling and message signing.

Defines the contract for turning an encoded private key into a keypair
and producing a detached signature over a message.
"""

import abc
from typing import Any

from ..models.common import PrivateKey, PublicKey
from ..models.wallet import SignedAttestation


class Signer(abc.ABC):
    """Abstract Base Class for signing services."""

    @abc.abstractmethod
    def derive_keypair(self, encoded_private_key: PrivateKey) -> Any:
        """Decodes a private key into a keypair.

        Args:
            encoded_private_key: The private key as read from the key list.

        Returns:
            An implementation specific keypair object.

        Raises:
            InvalidKeyError: If the key is malformed.
        """
        pass

    @abc.abstractmethod
    def public_key_of(self, keypair: Any) -> PublicKey:
        """Returns the base58 public key of a keypair returned by derive_keypair."""
        pass

    @abc.abstractmethod
    def sign(self, keypair: Any, message: str) -> SignedAttestation:
        """Signs the UTF-8 bytes of a message.

        Args:
            keypair: A keypair returned by derive_keypair.
            message: The message to sign.

        Returns:
            The encoded signature and the signer's public key.

        Raises:
            SigningError: If the signature cannot be produced.
        """
        pass
