"""
Configuration management for the schema graph builder
"""
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from schema_graph.models.layout import LayoutType


class ParserConfig(BaseModel):
    """DDL parser configuration"""
    duplicate_tables: Literal["last_wins", "keep_all"] = "last_wins"
    default_index_type: str = "BTREE"


class LayoutConfig(BaseModel):
    """Layout engine configuration"""
    layout_type: LayoutType = LayoutType.HIERARCHICAL
    spacing: float = Field(default=450, gt=0)
    padding: float = Field(default=100, ge=0)
    viewport_width: float = Field(default=1920, gt=0)
    viewport_height: float = Field(default=1080, gt=0)
    force_iterations: int = Field(default=300, ge=0)
    overlap_iterations: int = Field(default=50, ge=1)
    seed: Optional[int] = None
    referenced_tables_on_top: bool = False


class RoutingConfig(BaseModel):
    """Edge routing configuration"""
    node_width: float = Field(default=300, gt=0)
    node_height: float = Field(default=200, gt=0)


class TableTypeFilter(BaseModel):
    """Table category visibility"""
    core_tables: bool = True
    junction_tables: bool = True
    lookup_tables: bool = True


class DataTypeFilter(BaseModel):
    """Column data type family visibility"""
    show_numbers: bool = True
    show_strings: bool = True
    show_dates: bool = True
    show_booleans: bool = True


class FilterConfig(BaseModel):
    """Schema filter configuration"""
    show_primary_keys: bool = True
    show_foreign_keys: bool = True
    show_indexes: bool = True
    show_relationships: bool = True
    table_types: TableTypeFilter = Field(default_factory=TableTypeFilter)
    data_types: DataTypeFilter = Field(default_factory=DataTypeFilter)
    hidden_tables: List[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: str = "INFO"
    format: str = "text"
    file: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class Config(BaseSettings):
    """Main configuration class"""
    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_GRAPH_",
        env_nested_delimiter="__",
    )

    parser: ParserConfig = Field(default_factory=ParserConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> "Config":
        """Load configuration from YAML file"""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**config_dict)
