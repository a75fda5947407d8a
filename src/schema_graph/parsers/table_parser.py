"""
Table definition parsing for CREATE TABLE bodies
"""
import logging
import re
from typing import List, Optional

from schema_graph.models.schema import Column, ForeignKey, Table
from schema_graph.utils.sql_normalizer import (
    IDENTIFIER,
    SCHEMA_PREFIX,
    clean_identifier,
    collapse_whitespace,
    split_identifier_list,
    split_top_level,
    strip_comments,
)

logger = logging.getLogger(__name__)


def zip_foreign_keys(columns: List[str], referenced_table: str,
                     referenced_columns: List[str], owner: str = "") -> List[ForeignKey]:
    """
    Pair local and referenced columns positionally

    Lists of unequal length are truncated to the shorter one.
    """
    if len(columns) != len(referenced_columns):
        logger.warning(
            f"Foreign key column count mismatch on {owner or 'table'} "
            f"({len(columns)} -> {len(referenced_columns)} in {referenced_table}), "
            f"pairing the first {min(len(columns), len(referenced_columns))}"
        )
    return [
        ForeignKey(column=column, referenced_table=referenced_table, referenced_column=ref_column)
        for column, ref_column in zip(columns, referenced_columns)
    ]


class TableDefinitionParser:
    """Parses the body of a CREATE TABLE statement into a Table"""

    PRIMARY_KEY = re.compile(r'\bPRIMARY\s+KEY\b', re.IGNORECASE)
    LEADING_PRIMARY_KEY = re.compile(r'^\s*PRIMARY\s+KEY\s*\(', re.IGNORECASE)
    PRIMARY_KEY_COLUMNS = re.compile(r'PRIMARY\s+KEY\s*\(\s*([^)]+)\)', re.IGNORECASE)
    CONSTRAINT = re.compile(r'\bCONSTRAINT\b', re.IGNORECASE)
    LEADING_CONSTRAINT = re.compile(r'^\s*CONSTRAINT\b', re.IGNORECASE)
    REFERENCES = re.compile(r'\bREFERENCES\b', re.IGNORECASE)
    NOT_NULL = re.compile(r'\bNOT\s+NULL\b', re.IGNORECASE)

    TABLE_FOREIGN_KEY = re.compile(
        r'^\s*(?:CONSTRAINT\s+' + IDENTIFIER + r'\s+)?FOREIGN\s+KEY\s*\(\s*([^)]+)\)\s*'
        r'REFERENCES\s+' + SCHEMA_PREFIX + IDENTIFIER + r'\s*\(\s*([^)]+)\)',
        re.IGNORECASE
    )
    INLINE_REFERENCE = re.compile(
        r'REFERENCES\s+' + SCHEMA_PREFIX + IDENTIFIER + r'\s*\(\s*' + IDENTIFIER + r'\s*\)',
        re.IGNORECASE
    )
    # Table-level clauses that declare no column
    TABLE_CONSTRAINT = re.compile(
        r'^\s*(?:'
        r'(?:UNIQUE|CHECK)\b\s*(?:(?:KEY|INDEX)\b\s*)?(?:\w+\s*)?\('
        r'|EXCLUDE\s+(?:USING\b|\()'
        r'|(?:FULLTEXT|SPATIAL)\b'
        r'|(?:KEY|INDEX)\s*\('
        r'|(?:KEY|INDEX)\s+\w+\s*\(\s*[`"]?[A-Za-z_]'
        r')',
        re.IGNORECASE
    )
    COLUMN = re.compile(r'^' + IDENTIFIER + r'\s+(.+)$', re.DOTALL)
    TYPE_TERMINATOR = re.compile(
        r'\s*\b(?:PRIMARY\s+KEY|NOT\s+NULL|NULL|UNIQUE|DEFAULT|REFERENCES|CONSTRAINT|CHECK|COMMENT)\b.*$',
        re.IGNORECASE | re.DOTALL
    )

    def parse(self, table_name: str, definition: str) -> Table:
        """
        Parse a table body into a Table

        Args:
            table_name: Name of the table
            definition: Text between the outer parentheses of CREATE TABLE

        Returns:
            Table with columns, primary keys and foreign keys
        """
        logger.debug(f"Parsing table: {table_name}")
        table = Table(name=table_name)

        for clause in split_top_level(strip_comments(definition)):
            self._parse_clause(table, clause)

        logger.debug(
            f"Table {table_name}: {len(table.columns)} columns, "
            f"PK: [{', '.join(table.primary_keys)}], {len(table.foreign_keys)} FKs"
        )
        return table

    def _parse_clause(self, table: Table, clause: str) -> None:
        if self.PRIMARY_KEY.search(clause) and (
                self.CONSTRAINT.search(clause) or self.LEADING_PRIMARY_KEY.match(clause)):
            pk_match = self.PRIMARY_KEY_COLUMNS.search(clause)
            if pk_match:
                for column_name in split_identifier_list(pk_match.group(1)):
                    table.add_primary_key(column_name)
                return
            if self.LEADING_CONSTRAINT.match(clause) or self.LEADING_PRIMARY_KEY.match(clause):
                return

        fk_match = self.TABLE_FOREIGN_KEY.match(clause)
        if fk_match:
            _, columns, referenced_table, referenced_columns = fk_match.groups()
            for fk in zip_foreign_keys(split_identifier_list(columns), referenced_table,
                                       split_identifier_list(referenced_columns), table.name):
                table.add_foreign_key(fk)
                logger.debug(f"Found table-level FK: {fk.column} -> {fk.referenced_table}({fk.referenced_column})")
            return

        if self.LEADING_CONSTRAINT.match(clause) or self.TABLE_CONSTRAINT.match(clause):
            logger.debug(f"Skipping table constraint in {table.name}: {collapse_whitespace(clause)}")
            return

        column = self._parse_column(table, clause)
        if column is None:
            logger.debug(f"Unrecognized clause in {table.name}: {collapse_whitespace(clause)}")

    def _parse_column(self, table: Table, clause: str) -> Optional[Column]:
        column_match = self.COLUMN.match(clause.strip())
        if not column_match:
            return None

        column_name = clean_identifier(column_match.group(1))
        rest = column_match.group(2).strip()

        column_type = collapse_whitespace(self.TYPE_TERMINATOR.sub('', rest))
        if not column_type:
            column_type = collapse_whitespace(rest)

        lowered_type = column_type.lower()
        if 'bigserial' in lowered_type:
            column_type = 'BIGINT'
            table.add_primary_key(column_name)
        elif 'serial' in lowered_type:
            column_type = 'INT'
            table.add_primary_key(column_name)

        if self.PRIMARY_KEY.search(rest):
            table.add_primary_key(column_name)

        if self.REFERENCES.search(rest):
            ref_match = self.INLINE_REFERENCE.search(rest)
            if ref_match:
                referenced_table, referenced_column = ref_match.groups()
                table.add_foreign_key(ForeignKey(
                    column=column_name,
                    referenced_table=referenced_table,
                    referenced_column=referenced_column
                ))
                logger.debug(f"Found inline FK: {column_name} -> {referenced_table}({referenced_column})")

        column = Column(
            name=column_name,
            type=column_type,
            nullable=not self.NOT_NULL.search(rest)
        )
        table.add_column(column)
        return column
