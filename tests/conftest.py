import os
import sqlite3

import django
import pytest

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')
django.setup()


@pytest.fixture
def make_database(tmp_path):
    """Create an SQLite file from a DDL script and return its path."""
    def _make(ddl, name='schema.db'):
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            conn.executescript(ddl)
            conn.commit()
        finally:
            conn.close()
        return path
    return _make


SHOP_DDL = """
CREATE TABLE customers (id INTEGER PRIMARY KEY, name TEXT);
CREATE TABLE orders (
    id INTEGER PRIMARY KEY,
    customer_id INTEGER REFERENCES customers(id) ON DELETE CASCADE
);
CREATE TABLE order_items (
    id INTEGER PRIMARY KEY,
    order_id INTEGER REFERENCES orders(id)
);
CREATE TABLE products (id INTEGER PRIMARY KEY);
"""


@pytest.fixture
def shop_database(make_database):
    return make_database(SHOP_DDL)
