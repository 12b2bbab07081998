# src/cache/__init__.py — v1
"""Cache store backends for identifier maps."""
