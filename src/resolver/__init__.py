# src/resolver/__init__.py — v1
"""Prefix rules, resolution and pruning."""
