"""
Generic document filter pipeline.

Callbacks are registered per node type. The pipeline walks the whole
document once, depth first, and lets each callback replace the node it
was given.
"""

import logging
from collections import Counter
from typing import Any, Callable, Optional

from .nodes import Block, Document, Table, TableHead

logger = logging.getLogger(__name__)


class FilterPipeline:
    """
    Applies node-type keyed callbacks to a Document.

    A callback receives the node and returns its replacement. Returning
    None, or the node itself, keeps the original. Replacement nodes are
    not walked again.
    """

    def __init__(self, actions: Optional[dict[type, Callable]] = None):
        self.actions = dict(actions or {})
        self.stats: Counter = Counter()

    def register(self, node_type: type, callback: Callable) -> None:
        self.actions[node_type] = callback

    def apply(self, document: Document) -> Document:
        """Run every registered callback over the document, in place."""
        self.stats.clear()
        document.blocks = self._walk(document.blocks)
        logger.debug(
            "Filter pass done: %s",
            ", ".join(f"{name}={count}" for name, count in sorted(self.stats.items())) or "no changes",
        )
        return document

    def _walk(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._walk(item) for item in value]

        if isinstance(value, dict):
            return {key: self._walk(item) for key, item in value.items()}

        if isinstance(value, Block):
            if value.content is not None:
                value.content = self._walk(value.content)
            return self._visit(value)

        if isinstance(value, Table):
            self._walk_table(value)
            return self._visit(value)

        return self._visit(value)

    def _walk_table(self, table: Table) -> None:
        if table.head is not None:
            self._walk_rows(table.head)
        table.caption = self._walk(table.caption)
        table.bodies = self._walk(table.bodies)
        table.foot = self._walk(table.foot)

    def _walk_rows(self, head: TableHead) -> None:
        for row in head.rows:
            for cell in row.cells:
                if cell.content is not None:
                    cell.content = self._walk(cell.content)

    def _visit(self, node: Any) -> Any:
        action = self.actions.get(type(node))
        if action is None:
            return node

        result = action(node)
        if result is None or result is node:
            return node

        self.stats[type(node).__name__] += 1
        return result

