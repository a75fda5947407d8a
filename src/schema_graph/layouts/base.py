"""
Base layout interface for table positioning algorithms
"""
from abc import ABC, abstractmethod
from typing import List

from schema_graph.core.config import LayoutConfig
from schema_graph.models.layout import PositionMap
from schema_graph.models.schema import Relationship, Table


class BaseLayout(ABC):
    """Abstract base class for layout algorithms"""

    def __init__(self, config: LayoutConfig):
        self.config = config

    @abstractmethod
    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        """
        Compute a position for every table

        Args:
            tables: Tables to place, in a stable order
            relationships: Relationships between them

        Returns:
            Mapping of table name to position
        """
        pass

    @staticmethod
    def internal_relationships(tables: List[Table],
                               relationships: List[Relationship]) -> List[Relationship]:
        """Relationships whose both ends are among the given tables"""
        names = {table.name for table in tables}
        return [
            rel for rel in relationships
            if rel.from_table in names and rel.to_table in names
        ]

    @property
    def center_x(self) -> float:
        return self.config.viewport_width / 2

    @property
    def center_y(self) -> float:
        return self.config.viewport_height / 2
