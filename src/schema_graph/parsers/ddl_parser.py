"""
DDL parser: SQL text to schema graph
"""
import logging
from typing import List, Optional

from schema_graph.models.schema import Schema, Table
from schema_graph.parsers.alter_extractor import AlterForeignKeyExtractor
from schema_graph.parsers.assembler import SchemaAssembler
from schema_graph.parsers.index_extractor import IndexExtractor
from schema_graph.parsers.statement_extractor import CreateTableStatement, StatementExtractor
from schema_graph.parsers.table_parser import TableDefinitionParser
from schema_graph.utils.sql_normalizer import DialectNormalizer


class DDLParser:
    """
    Tolerant, regex-driven DDL parser

    Recognizes CREATE TABLE, CREATE INDEX and ALTER TABLE ... ADD FOREIGN KEY
    statements and ignores everything else. parse() never raises: a failure
    in the primary path degrades to plain regex extraction, and a failure
    there yields an empty Schema.
    """

    def __init__(self, duplicate_tables: str = "last_wins", default_index_type: str = "BTREE",
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.index_extractor = IndexExtractor(default_type=default_index_type)
        self.statement_extractor = StatementExtractor()
        self.normalizer = DialectNormalizer()
        self.table_parser = TableDefinitionParser()
        self.alter_extractor = AlterForeignKeyExtractor()
        self.assembler = SchemaAssembler(duplicate_tables=duplicate_tables)

    def parse(self, sql: str) -> Schema:
        """
        Parse SQL text into a Schema

        Args:
            sql: Arbitrary SQL text

        Returns:
            Schema; empty when nothing could be extracted
        """
        try:
            return self._parse(sql)
        except Exception as e:
            self.logger.error(f"Error parsing SQL, falling back to regex parsing: {e}", exc_info=True)

        try:
            return self._fallback_regex_parsing(sql)
        except Exception as e:
            self.logger.error(f"Error in fallback regex parsing: {e}", exc_info=True)
            return Schema()

    def normalize(self, sql: str) -> str:
        """
        Normalized form of the CREATE TABLE statements in the text

        Only the extracted CREATE TABLE blocks are normalized; any other SQL
        is dropped. Falls back to the whole text when no block is found.
        """
        statements = self.statement_extractor.extract(sql)
        processed = '\n\n'.join(stmt.text for stmt in statements)
        if not processed.strip():
            processed = sql
        return self.normalizer.normalize(processed)

    def _parse(self, sql: str) -> Schema:
        indexes = self.index_extractor.extract(sql)
        statements = self.statement_extractor.extract(sql)

        normalized = self.normalizer.normalize('\n\n'.join(stmt.text for stmt in statements))
        self.logger.debug(f"Normalized {len(statements)} CREATE TABLE statements ({len(normalized)} chars)")

        tables = [self.table_parser.parse(stmt.table_name, stmt.body) for stmt in statements]
        alter_foreign_keys = self.alter_extractor.extract(sql)

        return self.assembler.assemble(tables, indexes, alter_foreign_keys)

    def _fallback_regex_parsing(self, sql: str) -> Schema:
        indexes = self.index_extractor.extract(sql)
        self.logger.info(f"Fallback parsing: found {len(indexes)} indexes")

        tables = self._parse_statements(self.statement_extractor.extract_regex(sql))
        alter_foreign_keys = self.alter_extractor.extract(sql)

        return self.assembler.assemble(tables, indexes, alter_foreign_keys)

    def _parse_statements(self, statements: List[CreateTableStatement]) -> List[Table]:
        tables = []
        for stmt in statements:
            try:
                tables.append(self.table_parser.parse(stmt.table_name, stmt.body))
            except Exception as e:
                self.logger.error(f"Error parsing table definition for {stmt.table_name}: {e}")
        return tables
