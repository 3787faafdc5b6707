# Path: bom_pivot/core/__init__.py
"""
bom_pivot Core Package

Core utilities shared by every layer.

Submodules:
    - logger: IPO-aware logging system
"""

from .logger import setup_ipo_logging

__all__ = [
    'setup_ipo_logging',
]
