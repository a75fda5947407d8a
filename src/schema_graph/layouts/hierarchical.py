"""
Hierarchical layout by dependency level
"""
import logging
from typing import Dict, List, Set

from schema_graph.layouts.base import BaseLayout
from schema_graph.models.layout import Position, PositionMap
from schema_graph.models.schema import Relationship, Table

logger = logging.getLogger(__name__)


class HierarchicalLayout(BaseLayout):
    """
    Stacks tables in topological levels

    A table depends on every table it references. Level 0 holds tables with
    no dependencies; each following level holds the tables whose
    dependencies are all placed. When a round places nothing (a cycle), all
    remaining tables go into that level at once.
    """

    LEVEL_SPACING_FACTOR = 1.2

    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        positions: PositionMap = {}
        if not tables:
            return positions

        levels = self.compute_levels(tables, relationships)
        spacing = self.config.spacing
        padding = self.config.padding
        level_spacing = spacing * self.LEVEL_SPACING_FACTOR
        anchor_x = self.center_x + padding

        for level_index, level in enumerate(levels):
            row = level_index if self.config.referenced_tables_on_top else len(levels) - 1 - level_index
            y = row * level_spacing + padding
            start_x = anchor_x - (len(level) - 1) * spacing / 2

            for table_index, table_name in enumerate(level):
                positions[table_name] = Position(x=start_x + table_index * spacing, y=y)

        return positions

    def compute_levels(self, tables: List[Table], relationships: List[Relationship]) -> List[List[str]]:
        """
        Group table names into dependency levels

        Self references and references to tables outside the given list are
        ignored.
        """
        dependencies: Dict[str, Set[str]] = {table.name: set() for table in tables}
        for rel in self.internal_relationships(tables, relationships):
            if rel.from_table != rel.to_table:
                dependencies[rel.from_table].add(rel.to_table)

        placed: Set[str] = set()
        levels: List[List[str]] = []

        while len(placed) < len(dependencies):
            level = [
                table.name for table in tables
                if table.name not in placed and dependencies[table.name] <= placed
            ]

            if not level:
                level = [table.name for table in tables if table.name not in placed]
                logger.debug(f"Circular dependencies, placing {len(level)} remaining tables on one level")

            # Repeated names collapse onto one node
            level = list(dict.fromkeys(level))
            levels.append(level)
            placed.update(level)

        return levels
