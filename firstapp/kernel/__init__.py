"""Kernel utilities shared across the package.

Rules:
- Kernel code must not import from the carrier or bootstrap layers.
- Kernel utilities should stay small and stable; avoid business logic here.
"""
