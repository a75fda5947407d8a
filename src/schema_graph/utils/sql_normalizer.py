"""
SQL text normalization utilities for dialect-varied DDL
"""
import logging
import re
from typing import List, Pattern, Tuple

logger = logging.getLogger(__name__)

# Optionally quoted identifier; group 1 is the bare name
IDENTIFIER = r'[`"\[]?(\w+)[`"\]]?'
# Optional schema qualifier in front of a table name
SCHEMA_PREFIX = r'(?:[`"\[]?\w+[`"\]]?\.)?'

_IDENTIFIER_QUOTES = '"`\'[]'
QUOTES = ("'", '"', '`')


class DialectNormalizer:
    """Rewrites PostgreSQL flavoured DDL into a more portable form"""

    # Applied in order; bigserial must be rewritten before serial
    TYPE_REWRITES: List[Tuple[str, str]] = [
        (r'IF\s+NOT\s+EXISTS', ''),
        (r'\bpublic\.', ''),
        (r'\bbigserial\b', 'BIGINT AUTO_INCREMENT'),
        (r'\bserial\b', 'INT AUTO_INCREMENT'),
        (r'\bTEXT\b', 'VARCHAR(65535)'),
        (r'\bJSONB\b', 'JSON'),
        (r'\bTIMESTAMP\s+WITH\s+TIME\s+ZONE\b', 'TIMESTAMP'),
        (r'\bTIMESTAMP\s+WITHOUT\s+TIME\s+ZONE\b', 'TIMESTAMP'),
    ]

    def __init__(self):
        self._rewrites: List[Tuple[Pattern, str]] = [
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in self.TYPE_REWRITES
        ]

    def normalize(self, sql: str) -> str:
        """
        Normalize dialect syntax, strip comments and collapse whitespace

        Args:
            sql: DDL text (normally the extracted CREATE TABLE blocks only)

        Returns:
            Single-line normalized DDL
        """
        processed = strip_comments(sql)
        for pattern, replacement in self._rewrites:
            processed = pattern.sub(replacement, processed)
        return collapse_whitespace(processed)


def literal_end(text: str, start: int) -> int:
    """
    Index just past the quoted literal or identifier opening at start

    Doubled quotes are escapes, and so is a backslash inside a single-quoted
    literal (MySQL).

    Returns:
        End index, or -1 when the quote never closes
    """
    quote = text[start]
    i = start + 1
    length = len(text)
    while i < length:
        char = text[i]
        if char == '\\' and quote == "'":
            i += 2
            continue
        if char == quote:
            if i + 1 < length and text[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return -1


def line_comment_at(text: str, index: int) -> bool:
    """True when a -- or MySQL # line comment starts at index"""
    return text.startswith('--', index) or text.startswith('#', index)


def strip_comments(text: str) -> str:
    """Remove line comments (-- and #) and /* */ block comments outside quotes"""
    out = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char in QUOTES:
            end = literal_end(text, i)
            if end == -1:
                out.append(text[i:])
                break
            out.append(text[i:end])
            i = end
        elif line_comment_at(text, i):
            end = text.find('\n', i)
            if end == -1:
                break
            i = end
        elif text.startswith('/*', i):
            end = text.find('*/', i + 2)
            out.append(' ')
            if end == -1:
                break
            i = end + 2
        else:
            out.append(char)
            i += 1
    return ''.join(out)


def collapse_whitespace(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def split_top_level(text: str, separator: str = ',') -> List[str]:
    """
    Split text on a separator that is not nested in parentheses or quotes

    Args:
        text: Text to split, e.g. a CREATE TABLE body
        separator: Single separator character

    Returns:
        Non-empty, stripped parts
    """
    parts = []
    current = []
    depth = 0
    quote = None
    escaped = False

    for char in text:
        if quote:
            if escaped:
                escaped = False
            elif char == '\\' and quote == "'":
                escaped = True
            elif char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        elif char == separator and depth == 0:
            part = ''.join(current).strip()
            if part:
                parts.append(part)
            current = []
            continue
        current.append(char)

    part = ''.join(current).strip()
    if part:
        parts.append(part)
    return parts


def clean_identifier(name: str) -> str:
    """Strip whitespace and identifier quoting"""
    return name.strip().strip(_IDENTIFIER_QUOTES).strip()


def split_identifier_list(text: str) -> List[str]:
    """Split a parenthesized column list body into clean names"""
    names = [clean_identifier(part) for part in text.split(',')]
    return [name for name in names if name]
