# src/generator/__init__.py — v1
"""Full-scan identifier map generators."""
