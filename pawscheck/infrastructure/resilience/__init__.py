"""API Resilience Implementations.

Contains services for retrying failed operations with randomized
exponential backoff and for bounding how many wallets run at once.
Bounded Context: API Resilience
"""
