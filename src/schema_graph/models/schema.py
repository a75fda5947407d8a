"""
Data models for schema graph representation
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Column:
    """Column definition in a table

    Key flags are derived from the owning table's primary key and foreign key
    lists, so they always agree with them.
    """
    name: str
    type: str
    nullable: bool = True

    _table = None

    def bind(self, table: "Table") -> None:
        """Attach the column to its owning table"""
        self._table = table

    @property
    def is_primary(self) -> bool:
        if self._table is None:
            return False
        return self._table.is_primary_key(self.name)

    @property
    def is_foreign(self) -> bool:
        if self._table is None:
            return False
        return self._table.is_foreign_key(self.name)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'type': self.type,
            'nullable': self.nullable,
            'is_primary': self.is_primary,
            'is_foreign': self.is_foreign
        }


@dataclass
class ForeignKey:
    """Single column pair of a foreign key"""
    column: str
    referenced_table: str
    referenced_column: str

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'column': self.column,
            'referenced_table': self.referenced_table,
            'referenced_column': self.referenced_column
        }


@dataclass
class Index:
    """Index declared with CREATE INDEX"""
    name: str
    columns: List[str] = field(default_factory=list)
    is_unique: bool = False
    type: str = "BTREE"

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'columns': list(self.columns),
            'is_unique': self.is_unique,
            'type': self.type
        }


@dataclass
class Table:
    """Table definition"""
    name: str
    columns: List[Column] = field(default_factory=list)
    primary_keys: List[str] = field(default_factory=list)
    foreign_keys: List[ForeignKey] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)

    def __post_init__(self):
        """Bind columns so their key flags follow this table"""
        for col in self.columns:
            col.bind(self)

    def get_column(self, name: str) -> Optional[Column]:
        """Get column by name (case-insensitive)"""
        lowered = name.lower()
        for col in self.columns:
            if col.name.lower() == lowered:
                return col
        return None

    def add_column(self, column: Column) -> None:
        """Add a new column"""
        if not self.get_column(column.name):
            column.bind(self)
            self.columns.append(column)

    def add_primary_key(self, column_name: str) -> None:
        """Add a column to the primary key, ignoring repeats"""
        if column_name not in self.primary_keys:
            self.primary_keys.append(column_name)

    def add_foreign_key(self, foreign_key: ForeignKey) -> None:
        self.foreign_keys.append(foreign_key)

    def is_primary_key(self, column_name: str) -> bool:
        lowered = column_name.lower()
        return any(pk.lower() == lowered for pk in self.primary_keys)

    def is_foreign_key(self, column_name: str) -> bool:
        lowered = column_name.lower()
        return any(fk.column.lower() == lowered for fk in self.foreign_keys)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'name': self.name,
            'columns': [col.to_dict() for col in self.columns],
            'primary_keys': list(self.primary_keys),
            'foreign_keys': [fk.to_dict() for fk in self.foreign_keys],
            'indexes': [idx.to_dict() for idx in self.indexes]
        }


@dataclass
class Relationship:
    """Directed edge from a referencing table to a referenced table"""
    id: str
    from_table: str
    to_table: str
    from_column: str
    to_column: str

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'id': self.id,
            'from': self.from_table,
            'to': self.to_table,
            'from_column': self.from_column,
            'to_column': self.to_column
        }


@dataclass
class Schema:
    """Parsed schema graph"""
    tables: List[Table] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tables

    def get_table(self, name: str) -> Optional[Table]:
        """Get table by name (case-insensitive)"""
        lowered = name.lower()
        for table in self.tables:
            if table.name.lower() == lowered:
                return table
        return None

    def table_names(self) -> List[str]:
        return [table.name for table in self.tables]

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'tables': [table.to_dict() for table in self.tables],
            'relationships': [rel.to_dict() for rel in self.relationships]
        }
