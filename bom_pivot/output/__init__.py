# Path: bom_pivot/output/__init__.py
"""
Output Module for bom_pivot

Renders engine results for humans. The engine's real consumer is a
pivot renderer outside this package; the text formatter here serves
the command line and debugging.

Usage:
    from output import AxisTextFormatter

    formatter = AxisTextFormatter()
    print(formatter.format_hierarchy(hierarchy))
    print(formatter.format_axis(workspace.axis_entries('row')))
"""

from .axis_text import AxisTextFormatter

__all__ = ['AxisTextFormatter']
