"""Core Application Layer: Orchestrates use cases and application logic.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the wallet pipeline, the batch runner, the result writer and the
command handler.
"""
