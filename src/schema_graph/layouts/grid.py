"""
Grid layout
"""
import math
from typing import List

from schema_graph.layouts.base import BaseLayout
from schema_graph.models.layout import Position, PositionMap
from schema_graph.models.schema import Relationship, Table


class GridLayout(BaseLayout):
    """Near-square grid with a fixed row/column parity offset"""

    ASPECT_RATIO = 0.75
    ROW_OFFSET_X = 60
    COLUMN_OFFSET_Y = 40

    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        positions: PositionMap = {}
        if not tables:
            return positions

        spacing = self.config.spacing
        padding = self.config.padding
        columns = max(2, math.ceil(math.sqrt(len(tables) / self.ASPECT_RATIO)))

        for index, table in enumerate(tables):
            col = index % columns
            row = index // columns
            positions[table.name] = Position(
                x=col * spacing + padding + (row % 2) * self.ROW_OFFSET_X,
                y=row * spacing + padding + (col % 2) * self.COLUMN_OFFSET_Y
            )

        return positions
