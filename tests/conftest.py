"""
Pytest configuration and shared fixtures
"""
import logging
import random

import pytest
from pathlib import Path
import tempfile

from schema_graph.core.config import Config, LayoutConfig, LoggingConfig
from schema_graph.core.engine import SchemaGraphEngine
from schema_graph.models.schema import Column, ForeignKey, Relationship, Table
from schema_graph.parsers.ddl_parser import DDLParser


ECOMMERCE_SQL = """
-- Sample Database Schema for E-commerce Platform
CREATE TABLE users (
    id INTEGER PRIMARY KEY,
    username VARCHAR(50) NOT NULL UNIQUE,
    email VARCHAR(100) NOT NULL UNIQUE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE categories (
    id INTEGER PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    parent_id INTEGER,
    FOREIGN KEY (parent_id) REFERENCES categories(id)
);

CREATE TABLE products (
    id INTEGER PRIMARY KEY,
    name VARCHAR(200) NOT NULL,
    price DECIMAL(10,2) NOT NULL,
    category_id INTEGER,
    FOREIGN KEY (category_id) REFERENCES categories(id)
);

CREATE TABLE orders (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL REFERENCES users(id),
    status VARCHAR(20) DEFAULT 'pending',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE order_items (
    order_id INTEGER NOT NULL,
    product_id INTEGER NOT NULL,
    quantity INTEGER NOT NULL,
    PRIMARY KEY (order_id, product_id)
);

ALTER TABLE order_items ADD FOREIGN KEY (order_id) REFERENCES orders(id);
ALTER TABLE order_items ADD CONSTRAINT fk_items_product FOREIGN KEY (product_id) REFERENCES products(id);

CREATE UNIQUE INDEX idx_users_email ON users (email);
CREATE INDEX idx_orders_user ON orders (user_id, created_at);

INSERT INTO users (id, username, email) VALUES (1, 'alice', 'alice@example.com');
"""


POSTGRES_SQL = """
CREATE TABLE IF NOT EXISTS public.accounts (
    id bigserial PRIMARY KEY,
    email text NOT NULL,
    profile jsonb,
    created_at timestamp with time zone DEFAULT now()
);

CREATE TABLE IF NOT EXISTS public.sessions (
    id serial,
    account_id bigint NOT NULL,
    token varchar(64) NOT NULL, -- opaque token
    /* expiry in UTC */
    expires_at timestamp without time zone,
    CONSTRAINT sessions_account_fk FOREIGN KEY (account_id) REFERENCES public.accounts(id)
);

CREATE INDEX IF NOT EXISTS idx_sessions_token ON public.sessions USING hash (token);
"""


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def ecommerce_sql():
    """Mixed DDL/DML e-commerce schema"""
    return ECOMMERCE_SQL


@pytest.fixture
def postgres_sql():
    """PostgreSQL flavoured schema"""
    return POSTGRES_SQL


@pytest.fixture
def parser():
    """DDL parser with default settings"""
    return DDLParser()


@pytest.fixture
def layout_config():
    """Layout configuration with default spacing"""
    return LayoutConfig(spacing=450, padding=100, viewport_width=1920, viewport_height=1080)


@pytest.fixture
def sample_tables():
    """Four tables: orders -> users, order_items -> orders, order_items -> products"""
    return [
        Table(name='users', columns=[Column(name='id', type='INTEGER')], primary_keys=['id']),
        Table(name='orders', columns=[Column(name='id', type='INTEGER'),
                                      Column(name='user_id', type='INTEGER')],
              primary_keys=['id'],
              foreign_keys=[ForeignKey('user_id', 'users', 'id')]),
        Table(name='products', columns=[Column(name='id', type='INTEGER')], primary_keys=['id']),
        Table(name='order_items', columns=[Column(name='order_id', type='INTEGER'),
                                           Column(name='product_id', type='INTEGER')],
              foreign_keys=[ForeignKey('order_id', 'orders', 'id'),
                            ForeignKey('product_id', 'products', 'id')]),
    ]


@pytest.fixture
def sample_relationships():
    """Relationships matching sample_tables"""
    return [
        Relationship(id='orders-users-0', from_table='orders', to_table='users',
                     from_column='user_id', to_column='id'),
        Relationship(id='order_items-orders-1', from_table='order_items', to_table='orders',
                     from_column='order_id', to_column='id'),
        Relationship(id='order_items-products-2', from_table='order_items', to_table='products',
                     from_column='product_id', to_column='id'),
    ]


@pytest.fixture
def sample_config(temp_dir):
    """Complete configuration for testing"""
    return Config(
        layout=LayoutConfig(seed=42),
        logging=LoggingConfig(file=str(temp_dir / "test.log"))
    )


@pytest.fixture
def engine(sample_config):
    """Engine with a seeded random source"""
    return SchemaGraphEngine(sample_config, rng=random.Random(42))


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
