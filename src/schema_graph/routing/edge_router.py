"""
Edge routing: connection side selection per relationship
"""
from typing import Dict, List

from schema_graph.models.layout import ConnectionPoint, Node, PositionMap, Side
from schema_graph.models.schema import Relationship

DEFAULT_NODE_WIDTH = 300
DEFAULT_NODE_HEIGHT = 200


def calculate_optimal_connection(source_node: Node, target_node: Node,
                                 default_width: float = DEFAULT_NODE_WIDTH,
                                 default_height: float = DEFAULT_NODE_HEIGHT) -> ConnectionPoint:
    """
    Choose the sides an edge leaves the source and enters the target

    The axis with the larger centre displacement wins; equal displacement
    takes the vertical sides.

    Args:
        source_node: Referencing table node
        target_node: Referenced table node
        default_width: Node width used when the node has none
        default_height: Node height used when the node has none

    Returns:
        ConnectionPoint with the chosen sides
    """
    if source_node.position is None or target_node.position is None:
        return ConnectionPoint(source_node.id, target_node.id, Side.BOTTOM, Side.TOP)

    source_x, source_y = _center(source_node, default_width, default_height)
    target_x, target_y = _center(target_node, default_width, default_height)

    delta_x = target_x - source_x
    delta_y = target_y - source_y

    if abs(delta_x) > abs(delta_y):
        if delta_x > 0:
            source_side, target_side = Side.RIGHT, Side.LEFT
        else:
            source_side, target_side = Side.LEFT, Side.RIGHT
    elif delta_y > 0:
        source_side, target_side = Side.BOTTOM, Side.TOP
    else:
        source_side, target_side = Side.TOP, Side.BOTTOM

    return ConnectionPoint(source_node.id, target_node.id, source_side, target_side)


def calculate_all_optimal_connections(nodes: List[Node], relationships: List[Relationship],
                                      default_width: float = DEFAULT_NODE_WIDTH,
                                      default_height: float = DEFAULT_NODE_HEIGHT
                                      ) -> Dict[str, ConnectionPoint]:
    """
    Route every relationship whose two nodes are present

    Returns:
        Mapping of "{from}-{to}-{index}" to ConnectionPoint
    """
    connections: Dict[str, ConnectionPoint] = {}
    node_map = {node.id: node for node in nodes}

    for index, rel in enumerate(relationships):
        source_node = node_map.get(rel.from_table)
        target_node = node_map.get(rel.to_table)
        if source_node and target_node:
            edge_id = f"{rel.from_table}-{rel.to_table}-{index}"
            connections[edge_id] = calculate_optimal_connection(
                source_node, target_node, default_width, default_height
            )

    return connections


def nodes_from_positions(positions: PositionMap) -> List[Node]:
    """Build router nodes from a position map"""
    return [Node(id=name, position=pos) for name, pos in positions.items()]


def _center(node: Node, default_width: float, default_height: float):
    width = node.width if node.width is not None else default_width
    height = node.height if node.height is not None else default_height
    return node.position.x + width / 2, node.position.y + height / 2
