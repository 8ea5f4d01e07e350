from contextlib import contextmanager
from copy import deepcopy
from pathlib import Path
from typing import List, Optional
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from django.db.utils import load_backend
from .db_graph import RelationRecord
import logging

logger = logging.getLogger(__name__)

FILE_ALIAS = 'target'

# pg_constraint.confdeltype codes
POSTGRES_DELETE_ACTIONS = {
    'a': 'NO ACTION',
    'r': 'RESTRICT',
    'c': 'CASCADE',
    'n': 'SET NULL',
    'd': 'SET DEFAULT',
}


class SchemaMappingError(Exception):
    pass


class DatabaseFileNotFound(SchemaMappingError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Database file not found: {path}")


class UnsupportedDatabase(SchemaMappingError):
    def __init__(self, vendor):
        self.vendor = vendor
        super().__init__(f"Reading foreign keys is not supported for {vendor} databases")


@contextmanager
def database_file_connection(db_file, alias=FILE_ALIAS):
    """Open an SQLite file read-only through Django's SQLite backend."""
    path = Path(db_file)
    if not path.is_file():
        raise DatabaseFileNotFound(db_file)

    settings_dict = deepcopy(connections.settings[DEFAULT_DB_ALIAS])
    settings_dict.update({
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': f"{path.resolve().as_uri()}?mode=ro",
        'OPTIONS': {},
    })
    backend = load_backend(settings_dict['ENGINE'])
    connection = backend.DatabaseWrapper(settings_dict, alias)
    logger.debug(f"Opened {path} read-only as '{alias}'")
    try:
        yield connection
    finally:
        connection.close()


def resolve_table_name(connection, table_name: str) -> Optional[str]:
    """Return the stored spelling of ``table_name``, matching case-insensitively as a fallback."""
    with connection.cursor() as cursor:
        table_names = connection.introspection.table_names(cursor)
    if table_name in table_names:
        return table_name
    matches = [name for name in table_names if name.lower() == table_name.lower()]
    if len(matches) == 1:
        return matches[0]
    return None


def table_exists(connection, table_name: str) -> bool:
    return resolve_table_name(connection, table_name) is not None


def fetch_relation_records(connection) -> List[RelationRecord]:
    """
    Read every foreign key of the schema behind ``connection``.

    One record is returned per constraint, including self-references, ordered
    by the referencing table so repeated runs see the same edge order.
    """
    readers = {
        'sqlite': _sqlite_relations,
        'mysql': _mysql_relations,
        'postgresql': _postgresql_relations,
    }
    reader = readers.get(connection.vendor)
    if reader is None:
        raise UnsupportedDatabase(connection.vendor)

    try:
        with connection.cursor() as cursor:
            records = reader(cursor)
    except DatabaseError as e:
        logger.error(f"Error reading foreign keys from {connection.alias}: {str(e)}", exc_info=True)
        raise

    logger.info(f"Read {len(records)} foreign keys from {connection.alias}")
    return records


def _sqlite_relations(cursor):
    # seq = 0 keeps one row per composite key. REFERENCES names match tables
    # case-insensitively, so the parent is mapped to its stored spelling.
    cursor.execute("""
        SELECT
            m.name,
            COALESCE(pm.name, p."table"),
            p.on_delete
        FROM
            sqlite_master m
            JOIN pragma_foreign_key_list(m.name) p
            LEFT JOIN sqlite_master pm
                ON pm.type = 'table' AND pm.name = p."table" COLLATE NOCASE
        WHERE
            m.type = 'table'
            AND p.seq = 0
        ORDER BY m.name, p.id
    """)
    return [RelationRecord(child, parent, on_delete) for child, parent, on_delete in cursor.fetchall()]


def _mysql_relations(cursor):
    cursor.execute("""
        SELECT
            TABLE_NAME,
            REFERENCED_TABLE_NAME,
            DELETE_RULE
        FROM
            INFORMATION_SCHEMA.REFERENTIAL_CONSTRAINTS
        WHERE
            CONSTRAINT_SCHEMA = DATABASE()
        ORDER BY TABLE_NAME, CONSTRAINT_NAME
    """)
    return [RelationRecord(child, parent, on_delete) for child, parent, on_delete in cursor.fetchall()]


def _postgresql_relations(cursor):
    cursor.execute("""
        SELECT
            child.relname,
            parent.relname,
            con.confdeltype
        FROM
            pg_constraint con
            JOIN pg_class child ON child.oid = con.conrelid
            JOIN pg_class parent ON parent.oid = con.confrelid
            JOIN pg_namespace ns ON ns.oid = child.relnamespace
        WHERE
            con.contype = 'f'
            AND ns.nspname = current_schema()
        ORDER BY child.relname, con.conname
    """)
    return [
        RelationRecord(child, parent, POSTGRES_DELETE_ACTIONS.get(action, 'NO ACTION'))
        for child, parent, action in cursor.fetchall()
    ]
