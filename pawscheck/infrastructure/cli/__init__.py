"""Rich console display."""
