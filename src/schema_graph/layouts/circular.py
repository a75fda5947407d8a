"""
Circular layout with the most connected tables on an inner ring
"""
import math
from typing import Dict, List

from schema_graph.layouts.base import BaseLayout
from schema_graph.models.layout import Position, PositionMap
from schema_graph.models.schema import Relationship, Table


class CircularLayout(BaseLayout):
    """Two concentric rings ranked by relationship degree"""

    MAX_CORE_TABLES = 3
    CORE_FRACTION = 0.3

    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        positions: PositionMap = {}
        if not tables:
            return positions

        if len(tables) == 1:
            positions[tables[0].name] = Position(x=self.center_x, y=self.center_y)
            return positions

        degree: Dict[str, int] = {table.name: 0 for table in tables}
        for rel in relationships:
            if rel.from_table in degree:
                degree[rel.from_table] += 1
            if rel.to_table in degree:
                degree[rel.to_table] += 1

        # sorted() is stable, so equal degrees keep input order
        ranked = sorted(tables, key=lambda table: degree[table.name], reverse=True)

        core_count = min(self.MAX_CORE_TABLES, math.ceil(len(tables) * self.CORE_FRACTION))
        core_tables = ranked[:core_count]
        peripheral_tables = ranked[core_count:]

        core_radius = max(200, self.config.spacing * 0.8)
        outer_radius = max(400, self.config.spacing * 1.5)

        self._place_ring(positions, core_tables, core_radius)
        self._place_ring(positions, peripheral_tables, outer_radius)

        return positions

    def _place_ring(self, positions: PositionMap, tables: List[Table], radius: float) -> None:
        for index, table in enumerate(tables):
            angle = index / len(tables) * 2 * math.pi
            positions[table.name] = Position(
                x=self.center_x + math.cos(angle) * radius,
                y=self.center_y + math.sin(angle) * radius
            )
