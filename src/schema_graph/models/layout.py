"""
Layout and edge routing models
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class LayoutType(str, Enum):
    """Supported layout algorithms"""
    GRID = "grid"
    HIERARCHICAL = "hierarchical"
    CIRCULAR = "circular"
    MODULAR = "modular"
    FORCE = "force"


class Side(str, Enum):
    """Side of a table node an edge enters or leaves from"""
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"
    BOTTOM = "bottom"


@dataclass
class Position:
    """Canvas coordinates of a table node"""
    x: float
    y: float

    def copy(self) -> "Position":
        return Position(self.x, self.y)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {'x': self.x, 'y': self.y}


PositionMap = Dict[str, Position]


@dataclass
class Node:
    """Table node as seen by the edge router"""
    id: str
    position: Optional[Position] = None
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass
class ConnectionPoint:
    """Chosen sides for one relationship edge"""
    source_id: str
    target_id: str
    source_side: Side
    target_side: Side

    @property
    def source_handle(self) -> str:
        return f"{self.source_id}-source-{self.source_side.value}"

    @property
    def target_handle(self) -> str:
        return f"{self.target_id}-target-{self.target_side.value}"

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'source_handle': self.source_handle,
            'target_handle': self.target_handle,
            'source_side': self.source_side.value,
            'target_side': self.target_side.value
        }


def positions_to_dict(positions: PositionMap) -> Dict[str, dict]:
    """Serialize a position map"""
    return {name: pos.to_dict() for name, pos in positions.items()}
