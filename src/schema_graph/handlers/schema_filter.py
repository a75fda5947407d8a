"""
Schema filtering on derived copies of a parsed schema
"""
import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from schema_graph.core.config import FilterConfig
from schema_graph.models.schema import Column, Schema, Table

logger = logging.getLogger(__name__)


class TableCategory(Enum):
    """Heuristic table categories"""
    CORE = "core"
    JUNCTION = "junction"
    LOOKUP = "lookup"


class DataTypeFamily(Enum):
    """Column data type families"""
    NUMBER = "number"
    STRING = "string"
    DATE = "date"
    BOOLEAN = "boolean"
    OTHER = "other"


LOOKUP_NAME_HINTS = ('type', 'status', 'category', 'lookup')


def categorize_table(table: Table) -> TableCategory:
    """
    Classify a table as junction, lookup or core

    Junction tables carry two or more foreign key columns and at most five
    columns. Lookup tables are small id/name tables or are named like one.
    """
    column_count = len(table.columns)
    foreign_key_count = sum(1 for col in table.columns if col.is_foreign)

    if foreign_key_count >= 2 and column_count <= 5:
        return TableCategory.JUNCTION

    has_only_id_and_name = (
        column_count <= 3
        and any('id' in col.name.lower() for col in table.columns)
        and any('name' in col.name.lower() for col in table.columns)
    )
    name = table.name.lower()
    if has_only_id_and_name or any(hint in name for hint in LOOKUP_NAME_HINTS):
        return TableCategory.LOOKUP

    return TableCategory.CORE


def data_type_family(column_type: str) -> DataTypeFamily:
    """Map a raw declared type to its family"""
    lowered = column_type.lower()
    if any(token in lowered for token in ('int', 'number', 'decimal', 'float')):
        return DataTypeFamily.NUMBER
    if any(token in lowered for token in ('varchar', 'text', 'char')):
        return DataTypeFamily.STRING
    if any(token in lowered for token in ('timestamp', 'date', 'time')):
        return DataTypeFamily.DATE
    if 'bool' in lowered:
        return DataTypeFamily.BOOLEAN
    return DataTypeFamily.OTHER


@dataclass
class VisibilityStats:
    total: int = 0
    visible: int = 0

    @property
    def hidden(self) -> int:
        return self.total - self.visible

    def to_dict(self) -> dict:
        return {'total': self.total, 'visible': self.visible, 'hidden': self.hidden}


@dataclass
class FilterStats:
    """Visibility counts of a filtered schema"""
    tables: VisibilityStats = field(default_factory=VisibilityStats)
    relationships: VisibilityStats = field(default_factory=VisibilityStats)

    def to_dict(self) -> dict:
        return {'tables': self.tables.to_dict(), 'relationships': self.relationships.to_dict()}


@dataclass
class FilteredSchema:
    """Filtered copy of a schema with its statistics"""
    schema: Schema
    stats: FilterStats


class SchemaFilter:
    """Derives filtered schema copies; the source schema is never modified"""

    def __init__(self, config: Optional[FilterConfig] = None):
        self.config = config or FilterConfig()

    def categorize(self, schema: Schema) -> Dict[TableCategory, List[Table]]:
        """Group tables by category"""
        categories: Dict[TableCategory, List[Table]] = {category: [] for category in TableCategory}
        for table in schema.tables:
            categories[categorize_table(table)].append(table)
        return categories

    def apply(self, schema: Schema, hidden_tables: Optional[List[str]] = None) -> FilteredSchema:
        """
        Filter a schema

        Args:
            schema: Parsed schema
            hidden_tables: Table names to hide in addition to the configured ones

        Returns:
            FilteredSchema holding a new Schema and visibility statistics
        """
        hidden = {name.lower() for name in self.config.hidden_tables}
        hidden.update(name.lower() for name in hidden_tables or [])

        tables = [
            table for table in schema.tables
            if table.name.lower() not in hidden and self._category_visible(table)
        ]
        tables = [self._filter_table(table) for table in tables]
        tables = [table for table in tables if table is not None]

        relationships = []
        if self.config.show_relationships:
            relationships = [
                copy.copy(rel) for rel in schema.relationships
                if rel.from_table.lower() not in hidden and rel.to_table.lower() not in hidden
            ]

        stats = FilterStats(
            tables=VisibilityStats(total=len(schema.tables), visible=len(tables)),
            relationships=VisibilityStats(total=len(schema.relationships), visible=len(relationships))
        )
        logger.debug(
            f"Filtered schema: {stats.tables.visible}/{stats.tables.total} tables, "
            f"{stats.relationships.visible}/{stats.relationships.total} relationships"
        )
        return FilteredSchema(schema=Schema(tables=tables, relationships=relationships), stats=stats)

    def _category_visible(self, table: Table) -> bool:
        table_types = self.config.table_types
        category = categorize_table(table)
        if category is TableCategory.JUNCTION:
            return table_types.junction_tables
        if category is TableCategory.LOOKUP:
            return table_types.lookup_tables
        return table_types.core_tables

    def _filter_table(self, table: Table) -> Optional[Table]:
        data_types = self.config.data_types
        visible_families = {
            DataTypeFamily.NUMBER: data_types.show_numbers,
            DataTypeFamily.STRING: data_types.show_strings,
            DataTypeFamily.DATE: data_types.show_dates,
            DataTypeFamily.BOOLEAN: data_types.show_booleans,
            DataTypeFamily.OTHER: True,
        }
        columns = [col for col in table.columns if visible_families[data_type_family(col.type)]]

        # Only the data type filter removes tables that end up empty
        if not columns and not all(visible_families.values()):
            return None

        columns = [
            col for col in columns
            if not (col.is_primary and not self.config.show_primary_keys)
            and not (col.is_foreign and not self.config.show_foreign_keys)
        ]

        return Table(
            name=table.name,
            columns=[Column(name=col.name, type=col.type, nullable=col.nullable) for col in columns],
            primary_keys=list(table.primary_keys),
            foreign_keys=[copy.copy(fk) for fk in table.foreign_keys],
            indexes=[copy.deepcopy(idx) for idx in table.indexes] if self.config.show_indexes else []
        )
