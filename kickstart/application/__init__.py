"""Application layer orchestrating repositories into use cases."""
