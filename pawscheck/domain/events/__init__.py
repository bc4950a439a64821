"""Domain Event definitions.

Represents significant occurrences within the domain that other parts
of the system might react to (retries, exhausted retries, checked wallets).
"""
