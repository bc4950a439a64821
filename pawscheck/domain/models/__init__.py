"""Domain models (Value Objects) for wallets, signatures and outcomes."""
