#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdprinters/utils/__init__.py
"""Utility helpers for escaping, assets, I/O and dependency checks."""
