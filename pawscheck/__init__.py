"""pawscheck: Paws OG airdrop eligibility checker.

Signs a fixed message with each wallet's private key, submits the signature
to the Paws eligibility API and splits the wallets into eligible and
not-eligible result files.
"""

__version__ = "1.0.0"
