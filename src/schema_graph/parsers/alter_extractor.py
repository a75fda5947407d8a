"""
ALTER TABLE foreign key extraction
"""
import logging
import re
from dataclasses import dataclass
from typing import List

from schema_graph.models.schema import ForeignKey
from schema_graph.parsers.table_parser import zip_foreign_keys
from schema_graph.utils.sql_normalizer import IDENTIFIER, SCHEMA_PREFIX, split_identifier_list

logger = logging.getLogger(__name__)


@dataclass
class AlterForeignKey:
    """Foreign key added to a table after its creation"""
    table_name: str
    foreign_key: ForeignKey


class AlterForeignKeyExtractor:
    """Scans the full SQL text for ALTER TABLE ... ADD FOREIGN KEY statements"""

    # CONSTRAINT is optional, so named and unnamed forms match once each
    ALTER_FK_PATTERN = re.compile(
        r'ALTER\s+TABLE\s+(?:ONLY\s+)?(?:IF\s+(?:NOT\s+)?EXISTS\s+)?(?:ONLY\s+)?' + SCHEMA_PREFIX + IDENTIFIER
        + r'\s+ADD\s+(?:CONSTRAINT\s+' + IDENTIFIER + r'\s+)?FOREIGN\s+KEY\s*\(\s*([^)]+)\)\s*'
        r'REFERENCES\s+' + SCHEMA_PREFIX + IDENTIFIER + r'\s*\(\s*([^)]+)\)',
        re.IGNORECASE
    )

    def extract(self, sql: str) -> List[AlterForeignKey]:
        """
        Extract foreign keys added by ALTER TABLE

        Composite keys are paired positionally up to the shorter column list.

        Args:
            sql: Raw, unmodified SQL text

        Returns:
            Foreign keys in source order, tagged with the altered table name
        """
        found = []

        for match in self.ALTER_FK_PATTERN.finditer(sql):
            table_name, _, columns, referenced_table, referenced_columns = match.groups()
            foreign_keys = zip_foreign_keys(
                split_identifier_list(columns),
                referenced_table,
                split_identifier_list(referenced_columns),
                table_name
            )
            for fk in foreign_keys:
                found.append(AlterForeignKey(table_name=table_name, foreign_key=fk))
                logger.debug(
                    f"Found ALTER FK: {table_name}.{fk.column} -> "
                    f"{fk.referenced_table}.{fk.referenced_column}"
                )

        return found
