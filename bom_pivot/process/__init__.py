# Path: bom_pivot/process/__init__.py
"""
Process Layer for bom_pivot

The PROCESS layer turns dimension and fact records into pivot views:
- hierarchy/ - Dimension tree building and descendant indexing
- pivot/ - Expansion state, flattening, composition and filtering

All components follow the IPO pattern:
- Read from INPUT layer (loaders)
- Process data (trees, axis sequences, filtered subsets)
- Prepare for OUTPUT layer (text rendering)
"""

from process.hierarchy import HierarchyBuilder, Hierarchy, HierarchyNode
from process.pivot import PivotWorkspace

__all__ = [
    'HierarchyBuilder',
    'Hierarchy',
    'HierarchyNode',
    'PivotWorkspace',
]
