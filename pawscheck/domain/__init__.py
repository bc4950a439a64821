"""Domain Layer: value objects, exceptions, interfaces and events.

Has no dependencies on the core or infrastructure layers.
"""
