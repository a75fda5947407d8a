"""
Modular layout grouping tables by name prefix
"""
import math
from typing import Dict, List

from schema_graph.layouts.base import BaseLayout
from schema_graph.models.layout import Position, PositionMap
from schema_graph.models.schema import Relationship, Table


class ModularLayout(BaseLayout):
    """Groups on a square grid, each group on its own square sub-grid"""

    GROUP_SPACING_FACTOR = 2.5
    TABLE_SPACING_FACTOR = 0.8
    DEFAULT_GROUP = "misc"

    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        positions: PositionMap = {}
        if not tables:
            return positions

        groups = self.group_tables(tables)
        groups_per_row = math.ceil(math.sqrt(len(groups)))
        group_pitch = self.config.spacing * self.GROUP_SPACING_FACTOR
        table_pitch = self.config.spacing * self.TABLE_SPACING_FACTOR

        for group_index, group_tables in enumerate(groups.values()):
            group_row = group_index // groups_per_row
            group_col = group_index % groups_per_row
            base_x = group_col * group_pitch + self.config.padding
            base_y = group_row * group_pitch + self.config.padding

            sub_grid_cols = max(1, math.ceil(math.sqrt(len(group_tables))))
            for table_index, table in enumerate(group_tables):
                positions[table.name] = Position(
                    x=base_x + (table_index % sub_grid_cols) * table_pitch,
                    y=base_y + (table_index // sub_grid_cols) * table_pitch
                )

        return positions

    @classmethod
    def group_name(cls, table_name: str) -> str:
        """Text before the first underscore, or the default group when empty"""
        return table_name.split('_')[0] or cls.DEFAULT_GROUP

    @classmethod
    def group_tables(cls, tables: List[Table]) -> Dict[str, List[Table]]:
        """Group tables by prefix, keeping first-seen group order"""
        groups: Dict[str, List[Table]] = {}
        for table in tables:
            groups.setdefault(cls.group_name(table.name), []).append(table)
        return groups
