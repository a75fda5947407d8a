"""
Schema assembly from parsed tables, indexes and ALTER TABLE foreign keys
"""
import logging
from typing import List, Optional

from schema_graph.models.schema import ForeignKey, Relationship, Schema, Table
from schema_graph.parsers.alter_extractor import AlterForeignKey
from schema_graph.parsers.index_extractor import ExtractedIndex

logger = logging.getLogger(__name__)


def find_table(tables: List[Table], name: str) -> Optional[Table]:
    """Find a table by case-insensitive name"""
    lowered = name.lower()
    for table in tables:
        if table.name.lower() == lowered:
            return table
    return None


class SchemaAssembler:
    """Merges parsing results into one consistent Schema"""

    def __init__(self, duplicate_tables: str = "last_wins"):
        self.duplicate_tables = duplicate_tables

    def assemble(self, tables: List[Table], indexes: List[ExtractedIndex],
                 alter_foreign_keys: List[AlterForeignKey]) -> Schema:
        """
        Build the Schema

        Relationships are emitted for CREATE TABLE foreign keys in table order,
        then for ALTER TABLE foreign keys as they are merged.

        Args:
            tables: Tables in source order
            indexes: Extracted CREATE INDEX statements
            alter_foreign_keys: Foreign keys found in ALTER TABLE statements

        Returns:
            Assembled Schema
        """
        tables = self.deduplicate(tables)
        relationships: List[Relationship] = []

        for table in tables:
            for fk in table.foreign_keys:
                relationships.append(self._relationship(tables, table, fk, relationships))

        self.merge_alter_foreign_keys(tables, alter_foreign_keys, relationships)
        self.associate_indexes(tables, indexes)

        logger.info(f"Assembled schema: {len(tables)} tables, {len(relationships)} relationships")
        return Schema(tables=tables, relationships=relationships)

    def deduplicate(self, tables: List[Table]) -> List[Table]:
        """Apply the duplicate table name policy"""
        result: List[Table] = []
        for table in tables:
            existing = find_table(result, table.name)
            if existing is None:
                result.append(table)
                continue

            if self.duplicate_tables == "keep_all":
                logger.warning(f"Duplicate table definition for {table.name}, keeping both")
                result.append(table)
            else:
                logger.warning(f"Duplicate table definition for {table.name}, later definition wins")
                result[result.index(existing)] = table
        return result

    def merge_alter_foreign_keys(self, tables: List[Table],
                                 alter_foreign_keys: List[AlterForeignKey],
                                 relationships: List[Relationship]) -> None:
        """Attach ALTER TABLE foreign keys to their tables and emit relationships"""
        for alter_fk in alter_foreign_keys:
            table = find_table(tables, alter_fk.table_name)
            if table is None:
                logger.debug(f"ALTER TABLE targets unknown table {alter_fk.table_name}, skipped")
                continue

            table.add_foreign_key(alter_fk.foreign_key)
            relationships.append(self._relationship(tables, table, alter_fk.foreign_key, relationships))

    def associate_indexes(self, tables: List[Table], indexes: List[ExtractedIndex]) -> None:
        """Attach indexes to tables by case-insensitive name"""
        for extracted in indexes:
            table = find_table(tables, extracted.table_name)
            if table is None:
                logger.debug(
                    f"Index {extracted.index.name} references unknown table "
                    f"{extracted.table_name}, dropped"
                )
                continue
            table.indexes.append(extracted.index)

    @staticmethod
    def _relationship(tables: List[Table], table: Table, fk: ForeignKey,
                      relationships: List[Relationship]) -> Relationship:
        # References to known tables use the declared spelling of the name
        target = find_table(tables, fk.referenced_table)
        if target is not None and target.name != fk.referenced_table:
            logger.debug(f"Reference to {fk.referenced_table} resolved to table {target.name}")
            fk.referenced_table = target.name

        relationship = Relationship(
            id=f"{table.name}-{fk.referenced_table}-{len(relationships)}",
            from_table=table.name,
            to_table=fk.referenced_table,
            from_column=fk.column,
            to_column=fk.referenced_column
        )
        logger.debug(
            f"Relationship {relationship.from_table}.{relationship.from_column} -> "
            f"{relationship.to_table}.{relationship.to_column}"
        )
        return relationship
