# Path: bom_pivot/dictionary/__init__.py
"""
Dictionary Module - Dimension Definitions

Holds the YAML declaration of every pivot dimension: which record
fields carry the path, the leaf id and the leaf label, and which fact
field correlates with the leaves.

Structure:
    dictionary/
    └── dimensions.yaml   # One entry per dimension

Adding New Dimensions:
    1. Add an entry to dimensions.yaml
    2. No code changes required - the builder is generic

Example:
    from loaders import DimensionConfigLoader

    definitions = DimensionConfigLoader().load_all()
    le = definitions['le']
"""

from pathlib import Path

# Dictionary root path
DICTIONARY_ROOT = Path(__file__).parent

# Shipped dimension declarations
DIMENSIONS_FILE = DICTIONARY_ROOT / 'dimensions.yaml'

__all__ = [
    'DICTIONARY_ROOT',
    'DIMENSIONS_FILE',
]
