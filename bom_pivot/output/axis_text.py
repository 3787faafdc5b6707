# Path: bom_pivot/output/axis_text.py
"""
Axis Text Formatter for bom_pivot

Renders hierarchies, flattened axes and composite axes as plain text
for the command line.

A hierarchy is drawn like the 'tree' command:

    All Legal Entities
    +-- EU
    |   `-- FR [L3]
    `-- NA
        `-- US

A flattened axis is one line per visible node, indented by level, with
an expand marker:

    [-] All Legal Entities
      [+] EU
      [+] NA
"""

from typing import Optional, Sequence, Union

from constants import MENU_SEPARATOR, PERCENTAGE_PLACES, TEXT_INDENT_SIZE
from core.logger import get_output_logger
from process.hierarchy.hierarchy import Hierarchy
from process.hierarchy.node import HierarchyNode
from process.pivot.composer import CompositeEntry
from process.pivot.flattener import FlatRow
from process.pivot.mapping import DimensionMapping

logger = get_output_logger('axis_text')


class AxisTextFormatter:
    """
    Formats hierarchies and axes as text.

    Uses ASCII characters by default:
    +-- for branch
    |   for continuation
    `-- for last child
    """

    # Tree drawing characters
    BRANCH = '+-- '
    LAST_BRANCH = '`-- '
    PIPE = '|   '
    SPACE = '    '

    # Expand markers
    EXPANDED = '[-]'
    COLLAPSED = '[+]'
    LEAF = '   '

    def __init__(self, use_unicode: bool = False, indent_size: int = TEXT_INDENT_SIZE):
        """
        Initialize formatter.

        Args:
            use_unicode: Use Unicode box-drawing chars instead of ASCII
            indent_size: Spaces per level in axis listings
        """
        self.indent_size = indent_size
        if use_unicode:
            self.BRANCH = '\u251c\u2500\u2500 '
            self.LAST_BRANCH = '\u2514\u2500\u2500 '
            self.PIPE = '\u2502   '
            self.SPACE = '    '

    # =========================================================================
    # HIERARCHY
    # =========================================================================

    def format_hierarchy(self, hierarchy: Hierarchy) -> str:
        """
        Draw a whole hierarchy as a tree.

        Args:
            hierarchy: Hierarchy to draw

        Returns:
            Multi-line string; a note for an empty hierarchy
        """
        if hierarchy.root is None:
            return f'(empty hierarchy: {hierarchy.dimension})'

        lines = [self._node_text(hierarchy.root)]
        children = hierarchy.root.children
        for i, child in enumerate(children):
            lines.extend(self._format_node(child, '', i == len(children) - 1))

        logger.debug(f"Rendered '{hierarchy.dimension}' tree with {len(lines)} lines")
        return '\n'.join(lines)

    def _format_node(self, node: HierarchyNode, prefix: str, is_last: bool) -> list[str]:
        connector = self.LAST_BRANCH if is_last else self.BRANCH
        lines = [f'{prefix}{connector}{self._node_text(node)}']

        child_prefix = prefix + (self.SPACE if is_last else self.PIPE)
        for i, child in enumerate(node.children):
            lines.extend(self._format_node(child, child_prefix, i == len(node.children) - 1))
        return lines

    def _node_text(self, node: HierarchyNode) -> str:
        if node.is_leaf and node.fact_id is not None:
            return f'{node.label} [{self._fact_text(node.fact_id)}]'
        return node.label

    @staticmethod
    def _fact_text(fact_id) -> str:
        if isinstance(fact_id, list):
            return ', '.join(str(value) for value in fact_id)
        return str(fact_id)

    # =========================================================================
    # AXES
    # =========================================================================

    def _marker(self, row: FlatRow) -> str:
        if not row.has_children:
            return self.LEAF
        return self.EXPANDED if row.expanded else self.COLLAPSED

    def format_row(self, row: FlatRow) -> str:
        """One visible node: indent, expand marker, label."""
        indent = ' ' * (row.level * self.indent_size)
        return f'{indent}{self._marker(row)} {row.label}'

    def format_axis(
        self,
        entries: Sequence[Union[FlatRow, CompositeEntry]],
        counts: Optional[Sequence[int]] = None,
    ) -> str:
        """
        List the entries of one axis.

        Args:
            entries: FlatRows or CompositeEntry objects
            counts: Optional number per entry (e.g. matching fact records)

        Returns:
            Multi-line string
        """
        lines = []
        for index, entry in enumerate(entries):
            if isinstance(entry, CompositeEntry):
                text = ' | '.join(
                    f'{self._marker(component)} {component.label}'
                    for component in entry.components
                )
            else:
                text = self.format_row(entry)

            if counts is not None:
                text = f'{text}  ({counts[index]})'
            lines.append(text)

        return '\n'.join(lines)

    # =========================================================================
    # COVERAGE
    # =========================================================================

    def format_mapping(self, mapping: DimensionMapping, max_unmapped: int = 10) -> str:
        """Summarize a dimension/fact coverage report."""
        lines = [
            MENU_SEPARATOR,
            f'Dimension: {mapping.dimension} (fact field {mapping.fact_field})',
            f'Known ids: {len(mapping.known_ids)}',
            f'Used ids: {len(mapping.used_ids)}',
            f'Coverage: {mapping.coverage_percent:.{PERCENTAGE_PLACES}f}%',
        ]
        if mapping.unmapped_ids:
            unmapped = sorted(mapping.unmapped_ids, key=str)
            shown = ', '.join(str(value) for value in unmapped[:max_unmapped])
            more = len(unmapped) - max_unmapped
            if more > 0:
                shown = f'{shown} (+{more} more)'
            lines.append(f'Unmapped: {shown}')
        lines.append(MENU_SEPARATOR)
        return '\n'.join(lines)


__all__ = ['AxisTextFormatter']
