"""
CREATE TABLE statement extraction
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from schema_graph.utils.sql_normalizer import (
    IDENTIFIER,
    QUOTES,
    SCHEMA_PREFIX,
    line_comment_at,
    literal_end,
)

logger = logging.getLogger(__name__)


@dataclass
class CreateTableStatement:
    """One complete CREATE TABLE block"""
    table_name: str
    body: str
    text: str


class StatementExtractor:
    """Isolates CREATE TABLE blocks from arbitrary surrounding SQL"""

    HEADER_PATTERN = re.compile(
        r'CREATE\s+(?:(?:GLOBAL\s+|LOCAL\s+)?(?:TEMP|TEMPORARY)\s+|UNLOGGED\s+)?TABLE\s+'
        r'(?:IF\s+NOT\s+EXISTS\s+)?' + SCHEMA_PREFIX + IDENTIFIER + r'\s*\(',
        re.IGNORECASE
    )

    # Lazy body capture, only accepted when the match ends with ");"
    REGEX_PATTERN = re.compile(
        r'CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?' + SCHEMA_PREFIX + IDENTIFIER
        + r'\s*\(([\s\S]*?)\);',
        re.IGNORECASE
    )

    def extract(self, sql: str) -> List[CreateTableStatement]:
        """
        Extract CREATE TABLE blocks by balanced-parenthesis matching

        Blocks whose parentheses never balance are dropped.

        Args:
            sql: Raw SQL text

        Returns:
            Complete statements in source order
        """
        statements = []
        position = 0

        while True:
            match = self.HEADER_PATTERN.search(sql, position)
            if not match:
                break

            table_name = match.group(1)
            open_index = match.end() - 1
            close_index = find_matching_paren(sql, open_index)

            if close_index is None:
                logger.warning(f"Unbalanced parentheses in CREATE TABLE {table_name}, statement dropped")
                position = match.end()
                continue

            end = close_index + 1
            terminator = sql.find(';', end)
            text_end = terminator + 1 if terminator != -1 else len(sql)
            statements.append(CreateTableStatement(
                table_name=table_name,
                body=sql[open_index + 1:close_index],
                text=sql[match.start():text_end].strip()
            ))
            logger.debug(f"Extracted CREATE TABLE for: {table_name}")
            position = end

        logger.debug(f"Found {len(statements)} complete CREATE TABLE statements")
        return statements

    def extract_regex(self, sql: str) -> List[CreateTableStatement]:
        """
        Extract CREATE TABLE blocks with a single lazy regex

        Used by the degraded parsing path. A body containing ");" before the
        real end of the statement is cut short.

        Args:
            sql: Raw SQL text

        Returns:
            Statements in source order
        """
        statements = []
        for match in self.REGEX_PATTERN.finditer(sql):
            full_statement = match.group(0)
            if full_statement.strip().endswith(');'):
                statements.append(CreateTableStatement(
                    table_name=match.group(1),
                    body=match.group(2),
                    text=full_statement
                ))
        return statements


def find_matching_paren(text: str, open_index: int) -> Optional[int]:
    """
    Find the parenthesis closing the one at open_index

    Parentheses inside string literals and comments are not counted.

    Returns:
        Index of the closing parenthesis, or None when unbalanced
    """
    depth = 0
    i = open_index
    length = len(text)

    while i < length:
        char = text[i]
        if char in QUOTES:
            end = literal_end(text, i)
            if end == -1:
                return None
            i = end
            continue
        if line_comment_at(text, i):
            end = text.find('\n', i)
            if end == -1:
                return None
            i = end + 1
            continue
        if text.startswith('/*', i):
            end = text.find('*/', i + 2)
            if end == -1:
                return None
            i = end + 2
            continue
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return i
        i += 1

    return None
