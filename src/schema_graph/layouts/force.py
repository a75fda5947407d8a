"""
Force-directed layout
"""
import logging
import math
import random
from typing import Dict, List, Optional

from schema_graph.core.config import LayoutConfig
from schema_graph.layouts.base import BaseLayout
from schema_graph.models.layout import Position, PositionMap
from schema_graph.models.schema import Relationship, Table

logger = logging.getLogger(__name__)


class ForceDirectedLayout(BaseLayout):
    """
    Physics simulation with pairwise repulsion and spring attraction

    Each iteration is O(n^2) in the number of tables. Starting positions are
    random; pass a seeded random.Random (or set LayoutConfig.seed) for
    reproducible output.
    """

    ATTRACTION_STRENGTH = 0.1
    DAMPING = 0.9
    MIN_DISTANCE = 0.1

    def __init__(self, config: LayoutConfig, rng: Optional[random.Random] = None):
        super().__init__(config)
        self.rng = rng or random.Random(config.seed)

    def compute(self, tables: List[Table], relationships: List[Relationship]) -> PositionMap:
        positions = self.initial_positions(tables)
        if not positions:
            return positions

        names = list(positions)
        links = self.internal_relationships(tables, relationships)
        repulsion_strength = self.config.spacing * self.config.spacing

        for _ in range(self.config.force_iterations):
            forces: Dict[str, List[float]] = {name: [0.0, 0.0] for name in names}

            for name1 in names:
                pos1 = positions[name1]
                force = forces[name1]
                for name2 in names:
                    if name1 == name2:
                        continue
                    pos2 = positions[name2]
                    dx = pos1.x - pos2.x
                    dy = pos1.y - pos2.y
                    distance = math.sqrt(dx * dx + dy * dy) + self.MIN_DISTANCE
                    magnitude = repulsion_strength / (distance * distance)
                    force[0] += dx / distance * magnitude
                    force[1] += dy / distance * magnitude

            for rel in links:
                pos1 = positions[rel.from_table]
                pos2 = positions[rel.to_table]
                dx = pos2.x - pos1.x
                dy = pos2.y - pos1.y
                distance = math.sqrt(dx * dx + dy * dy) + self.MIN_DISTANCE
                magnitude = distance * self.ATTRACTION_STRENGTH
                fx = dx / distance * magnitude
                fy = dy / distance * magnitude
                forces[rel.from_table][0] += fx
                forces[rel.from_table][1] += fy
                forces[rel.to_table][0] -= fx
                forces[rel.to_table][1] -= fy

            for name in names:
                pos = positions[name]
                fx, fy = forces[name]
                pos.x = self._clamp(pos.x + fx * self.DAMPING, self.config.viewport_width)
                pos.y = self._clamp(pos.y + fy * self.DAMPING, self.config.viewport_height)

        logger.debug(f"Force layout finished after {self.config.force_iterations} iterations")
        return positions

    def initial_positions(self, tables: List[Table]) -> PositionMap:
        """Random start inside the central 80% of the viewport"""
        width = self.config.viewport_width
        height = self.config.viewport_height
        positions: PositionMap = {}
        for table in tables:
            positions[table.name] = Position(
                x=self.rng.random() * width * 0.8 + width * 0.1,
                y=self.rng.random() * height * 0.8 + height * 0.1
            )
        return positions

    def _clamp(self, value: float, extent: float) -> float:
        padding = self.config.padding
        return max(padding, min(extent - padding, value))
