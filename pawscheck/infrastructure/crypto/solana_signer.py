"""Concrete implementation of the Signer interface for Solana wallets.

Private keys are base58 strings, as exported by Phantom/Solflare (64-byte
secret key). A bare 32-byte ed25519 seed is accepted as well. Signatures
are detached ed25519 signatures, base58 encoded.
"""

import logging

import base58
from solders.keypair import Keypair

from pawscheck.domain.exceptions import InvalidKeyError, SigningError
from pawscheck.domain.interfaces.signer import Signer
from pawscheck.domain.models.common import PrivateKey, PublicKey, SignatureText
from pawscheck.domain.models.wallet import SignedAttestation

logger = logging.getLogger(__name__)

SECRET_KEY_LENGTH = 64
SEED_LENGTH = 32

class SolanaSigner(Signer):
    """Signs messages with solders keypairs."""

    def derive_keypair(self, encoded_private_key: PrivateKey) -> Keypair:
        key = (encoded_private_key or "").strip()
        if not key:
            raise InvalidKeyError("Private key is empty")
        try:
            key_bytes = base58.b58decode(key)
        except ValueError as e:
            raise InvalidKeyError(f"Private key is not valid base58: {e}") from e

        try:
            if len(key_bytes) == SECRET_KEY_LENGTH:
                return Keypair.from_bytes(key_bytes)
            if len(key_bytes) == SEED_LENGTH:
                return Keypair.from_seed(key_bytes)
        except Exception as e:
            # solders raises its own error types for mismatched key halves
            raise InvalidKeyError(f"Invalid secret key: {e}") from e
        raise InvalidKeyError(
            f"Invalid private key length: {len(key_bytes)} bytes "
            f"(expected {SECRET_KEY_LENGTH} or {SEED_LENGTH})"
        )

    def public_key_of(self, keypair: Keypair) -> PublicKey:
        return PublicKey(str(keypair.pubkey()))

    def sign(self, keypair: Keypair, message: str) -> SignedAttestation:
        try:
            signature = keypair.sign_message(message.encode("utf-8"))
            return SignedAttestation(
                signature=SignatureText(base58.b58encode(bytes(signature)).decode("ascii")),
                public_key=self.public_key_of(keypair),
            )
        except Exception as e:
            logger.debug(f"Signing failed: {type(e).__name__} - {e}")
            raise SigningError(f"Failed to sign message: {e}") from e
