"""
Layout engine: algorithm selection and position post-processing
"""
import logging
import math
import random
from typing import List, Optional, Union

from schema_graph.core.config import LayoutConfig
from schema_graph.layouts.factory import LayoutFactory
from schema_graph.layouts.force import ForceDirectedLayout
from schema_graph.models.layout import LayoutType, Position, PositionMap
from schema_graph.models.schema import Relationship, Table

logger = logging.getLogger(__name__)


class LayoutEngine:
    """Computes and adjusts table positions"""

    OVERLAP_DISTANCE_FACTOR = 0.7
    OVERLAP_PUSH = 10

    def __init__(self, config: Optional[LayoutConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or LayoutConfig()
        self.rng = rng

    def apply_layout(self, layout_type: Union[str, LayoutType, None], tables: List[Table],
                     relationships: List[Relationship]) -> PositionMap:
        """
        Compute positions with the selected algorithm

        Args:
            layout_type: Algorithm name; None selects the configured default
            tables: Tables to place
            relationships: Relationships between them

        Returns:
            Mapping of table name to position

        Raises:
            ValueError: If the layout type is not supported
        """
        layout_type = layout_type or self.config.layout_type
        layout = LayoutFactory.create_layout(layout_type, self.config)
        if isinstance(layout, ForceDirectedLayout) and self.rng is not None:
            layout.rng = self.rng

        positions = layout.compute(tables, relationships)
        logger.debug(f"{type(layout).__name__} placed {len(positions)} tables")
        return positions

    def distribute_evenly(self, tables: List[Table], current_positions: PositionMap) -> PositionMap:
        """
        Snap tables onto a uniform grid covering the current bounding box

        Args:
            tables: Tables to place, in grid order
            current_positions: Positions defining the bounding box

        Returns:
            New position map
        """
        positions: PositionMap = {}
        if not tables:
            return positions

        default_width = self.config.viewport_width * 0.8
        default_height = self.config.viewport_height * 0.8

        if current_positions:
            min_x = min(pos.x for pos in current_positions.values())
            min_y = min(pos.y for pos in current_positions.values())
            width = max(pos.x for pos in current_positions.values()) - min_x or default_width
            height = max(pos.y for pos in current_positions.values()) - min_y or default_height
        else:
            min_x = min_y = self.config.padding
            width, height = default_width, default_height

        aspect_ratio = width / height
        cols = max(1, math.ceil(math.sqrt(len(tables) * aspect_ratio)))
        rows = math.ceil(len(tables) / cols)

        spacing_x = width / max(1, cols - 1) or self.config.spacing
        spacing_y = height / max(1, rows - 1) or self.config.spacing

        for index, table in enumerate(tables):
            positions[table.name] = Position(
                x=min_x + (index % cols) * spacing_x,
                y=min_y + (index // cols) * spacing_y
            )

        return positions

    def resolve_overlaps(self, tables: List[Table], current_positions: PositionMap) -> PositionMap:
        """
        Push apart tables whose centres are closer than 0.7 x spacing

        Runs at most overlap_iterations rounds and stops at the first round
        without violations. Tables with no current position are ignored.

        Args:
            tables: Tables to separate
            current_positions: Positions to start from (not modified)

        Returns:
            New position map containing every entry of current_positions
        """
        positions = {name: pos.copy() for name, pos in current_positions.items()}
        min_distance = self.config.spacing * self.OVERLAP_DISTANCE_FACTOR
        names = list(dict.fromkeys(table.name for table in tables if table.name in positions))

        for iteration in range(self.config.overlap_iterations):
            has_overlaps = False

            for name1 in names:
                for name2 in names:
                    if name1 == name2:
                        continue

                    pos1 = positions[name1]
                    pos2 = positions[name2]
                    dx = pos1.x - pos2.x
                    dy = pos1.y - pos2.y
                    distance = math.sqrt(dx * dx + dy * dy)

                    if distance < min_distance:
                        has_overlaps = True
                        move = (min_distance - distance) / 2 + self.OVERLAP_PUSH
                        # Coincident centres separate along the x axis
                        unit_x, unit_y = (dx / distance, dy / distance) if distance else (1.0, 0.0)

                        pos1.x += unit_x * move
                        pos1.y += unit_y * move
                        pos2.x -= unit_x * move
                        pos2.y -= unit_y * move

            if not has_overlaps:
                logger.debug(f"Overlaps resolved after {iteration} rounds")
                break
        else:
            logger.debug(f"Overlap resolution stopped at the {self.config.overlap_iterations} round cap")

        return positions
