"""
CREATE INDEX extraction
"""
import logging
import re
from dataclasses import dataclass
from typing import List

from schema_graph.models.schema import Index
from schema_graph.parsers.statement_extractor import find_matching_paren
from schema_graph.utils.sql_normalizer import IDENTIFIER, SCHEMA_PREFIX, clean_identifier, split_top_level

logger = logging.getLogger(__name__)


@dataclass
class ExtractedIndex:
    """Index found in the SQL text together with the table it targets"""
    table_name: str
    index: Index


class IndexExtractor:
    """Finds CREATE INDEX statements anywhere in the SQL text"""

    # Ends at the opening parenthesis of the column list
    INDEX_PATTERN = re.compile(
        r'CREATE\s+(?:(UNIQUE)\s+)?INDEX\s+(?:CONCURRENTLY\s+)?(?:IF\s+NOT\s+EXISTS\s+)?'
        + IDENTIFIER
        + r'\s+ON\s+(?:ONLY\s+)?' + SCHEMA_PREFIX + IDENTIFIER
        + r'\s*(?:USING\s+(\w+)\s*)?\(',
        re.IGNORECASE
    )

    def __init__(self, default_type: str = "BTREE"):
        self.default_type = default_type

    def extract(self, sql: str) -> List[ExtractedIndex]:
        """
        Extract every recognizable CREATE INDEX statement

        Expression entries such as lower(email) are kept whole.

        Args:
            sql: Raw, unmodified SQL text

        Returns:
            Indexes paired with their (unqualified) table names
        """
        indexes = []

        for match in self.INDEX_PATTERN.finditer(sql):
            is_unique, index_name, table_name, method = match.groups()
            close_index = find_matching_paren(sql, match.end() - 1)
            if close_index is None:
                logger.debug(f"Unbalanced column list in index {index_name}, skipped")
                continue

            columns = [clean_identifier(part) for part in split_top_level(sql[match.end():close_index])]
            if not columns:
                continue

            index = Index(
                name=index_name,
                columns=columns,
                is_unique=bool(is_unique),
                type=method.upper() if method else self.default_type
            )
            indexes.append(ExtractedIndex(table_name=table_name, index=index))
            logger.debug(
                f"Found index {index_name} on table {table_name} for columns: {', '.join(columns)}"
            )

        return indexes
