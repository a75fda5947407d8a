"""
Diagram engine: parse, filter, lay out and route a schema
"""
import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from schema_graph.core.config import Config
from schema_graph.handlers.schema_filter import FilterStats, SchemaFilter
from schema_graph.layouts.engine import LayoutEngine
from schema_graph.models.layout import ConnectionPoint, LayoutType, PositionMap, positions_to_dict
from schema_graph.models.schema import Schema
from schema_graph.parsers.ddl_parser import DDLParser
from schema_graph.routing.edge_router import calculate_all_optimal_connections, nodes_from_positions

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = ('.sql', '.txt')


@dataclass
class Diagram:
    """Everything a renderer needs to draw one schema"""
    schema: Schema
    positions: PositionMap
    connections: Dict[str, ConnectionPoint]
    layout_type: str
    stats: Optional[FilterStats] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'layout_type': self.layout_type,
            'schema': self.schema.to_dict(),
            'positions': positions_to_dict(self.positions),
            'connections': {edge_id: conn.to_dict() for edge_id, conn in self.connections.items()},
            'stats': self.stats.to_dict() if self.stats else None,
            'warnings': list(self.warnings)
        }


class SchemaGraphEngine:
    """Runs the parse, filter, layout and routing stages"""

    def __init__(self, config: Optional[Config] = None, rng: Optional[random.Random] = None):
        self.config = config or Config()
        self.parser = DDLParser(
            duplicate_tables=self.config.parser.duplicate_tables,
            default_index_type=self.config.parser.default_index_type
        )
        self.schema_filter = SchemaFilter(self.config.filters)
        self.layout_engine = LayoutEngine(self.config.layout, rng=rng)

    def load_sql_file(self, path: Union[str, Path]) -> str:
        """
        Read SQL text from a .sql or .txt file

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file suffix is not supported
        """
        sql_path = Path(path)
        if not sql_path.exists():
            raise FileNotFoundError(f"SQL file not found: {path}")
        if sql_path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise ValueError(
                f"Unsupported file type: {sql_path.suffix}. "
                f"Supported types: {', '.join(SUPPORTED_SUFFIXES)}"
            )
        return sql_path.read_text(encoding="utf-8")

    def parse(self, sql: str) -> Schema:
        return self.parser.parse(sql)

    def filter(self, schema: Schema, hidden_tables: Optional[List[str]] = None):
        return self.schema_filter.apply(schema, hidden_tables)

    def layout(self, schema: Schema,
               layout_type: Union[str, LayoutType, None] = None) -> PositionMap:
        return self.layout_engine.apply_layout(layout_type, schema.tables, schema.relationships)

    def distribute_evenly(self, schema: Schema, positions: PositionMap) -> PositionMap:
        return self.layout_engine.distribute_evenly(schema.tables, positions)

    def resolve_overlaps(self, schema: Schema, positions: PositionMap) -> PositionMap:
        return self.layout_engine.resolve_overlaps(schema.tables, positions)

    def route(self, schema: Schema, positions: PositionMap) -> Dict[str, ConnectionPoint]:
        return calculate_all_optimal_connections(
            nodes_from_positions(positions),
            schema.relationships,
            self.config.routing.node_width,
            self.config.routing.node_height
        )

    def build_diagram(self, sql: str, layout_type: Union[str, LayoutType, None] = None,
                      resolve_overlaps: bool = False, distribute: bool = False,
                      hidden_tables: Optional[List[str]] = None) -> Diagram:
        """
        Produce a complete diagram from SQL text

        Args:
            sql: SQL text
            layout_type: Layout algorithm; None uses the configured default
            resolve_overlaps: Run overlap resolution after the layout
            distribute: Snap the layout onto an even grid
            hidden_tables: Extra table names to hide

        Returns:
            Diagram
        """
        layout_type = layout_type or self.config.layout.layout_type
        if not isinstance(layout_type, LayoutType):
            layout_type = LayoutType(layout_type.lower())
        schema = self.parse(sql)
        warnings = []
        if schema.is_empty:
            warnings.append("No CREATE TABLE statements found")
            logger.info("No CREATE TABLE statements found, nothing to render")

        filtered = self.filter(schema, hidden_tables)
        visible = filtered.schema

        positions = self.layout(visible, layout_type)
        if distribute:
            positions = self.distribute_evenly(visible, positions)
        if resolve_overlaps:
            positions = self.resolve_overlaps(visible, positions)

        known = {table.name for table in visible.tables}
        for rel in visible.relationships:
            if rel.to_table not in known and schema.get_table(rel.to_table) is None:
                warnings.append(f"Relationship {rel.id} references unknown table {rel.to_table}")

        connections = self.route(visible, positions)
        logger.info(
            f"Built {layout_type.value} diagram: {len(positions)} tables, {len(connections)} connections"
        )
        return Diagram(
            schema=visible,
            positions=positions,
            connections=connections,
            layout_type=layout_type.value,
            stats=filtered.stats,
            warnings=warnings
        )
