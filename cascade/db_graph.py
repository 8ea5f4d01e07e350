from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from django.db import models
import logging

logger = logging.getLogger(__name__)

CASCADE = 'CASCADE'


class Owner(models.TextChoices):
    # PARENT: the related table references this one.
    # SELF: this table references the related one.
    PARENT = 'parent', 'Parent'
    SELF = 'self', 'Self'


class RelationRecord:
    """One foreign key as read from the schema."""

    __slots__ = ('child_table', 'parent_table', 'on_delete')

    def __init__(self, child_table: str, parent_table: str, on_delete: str = 'NO ACTION'):
        self.child_table = child_table
        self.parent_table = parent_table
        self.on_delete = on_delete

    @property
    def cascades(self) -> bool:
        return (self.on_delete or '').upper() == CASCADE

    def __eq__(self, other):
        if not isinstance(other, RelationRecord):
            return NotImplemented
        return (self.child_table, self.parent_table, self.on_delete) == \
               (other.child_table, other.parent_table, other.on_delete)

    def __hash__(self):
        return hash((self.child_table, self.parent_table, self.on_delete))

    def __repr__(self):
        return f"RelationRecord({self.child_table!r}, {self.parent_table!r}, {self.on_delete!r})"

    def __str__(self):
        return f"{self.child_table} -> {self.parent_table} (ON DELETE {self.on_delete})"


class Table:
    def __init__(self, name: str):
        self.name = name
        self.relations: List['TableRelation'] = []
        self.collected = False

    def __repr__(self):
        return f"Table({self.name!r})"

    def __str__(self):
        return self.name


class TableRelation:
    def __init__(self, origin: Table, owner: Owner, table: Table, cascades: bool):
        self.origin = origin
        self.owner = owner
        self.table = table
        self.cascades = cascades

    def __repr__(self):
        return (f"TableRelation(origin={self.origin.name!r}, owner={self.owner.value!r}, "
                f"table={self.table.name!r}, cascades={self.cascades})")

    def __str__(self):
        return f"'{self.origin.name}' <-> '{self.table.name}'"


class TableRegistry:
    """Hands out exactly one Table per table name."""

    def __init__(self):
        self._tables: Dict[str, Table] = {}

    def get_or_create(self, name: str) -> Table:
        table = self._tables.get(name)
        if table is None:
            table = Table(name)
            self._tables[name] = table
        return table

    def get(self, name: str) -> Optional[Table]:
        return self._tables.get(name)

    def __contains__(self, name):
        return name in self._tables

    def __len__(self):
        return len(self._tables)

    def __iter__(self):
        return iter(self._tables.values())


def build_relation_graph(records: Iterable[RelationRecord], start_table_name: str,
                         registry: Optional[TableRegistry] = None) -> Table:
    """
    Build the connected relation graph around a table.

    Every foreign key touching a reached table is followed in both directions,
    so the result is the whole connected component of the schema, not only the
    tables depending on the start table.

    :param records: All foreign keys of the schema, in a stable order
    :param start_table_name: Name of the table the analysis starts from
    :param registry: Registry to share Table objects with, a fresh one by default
    :return: The Table for start_table_name
    """
    if registry is None:
        registry = TableRegistry()

    # A self-referencing key is listed once and matched on both sides below.
    records_by_table = defaultdict(list)
    for record in records:
        records_by_table[record.child_table].append(record)
        if record.parent_table != record.child_table:
            records_by_table[record.parent_table].append(record)

    root = registry.get_or_create(start_table_name)
    tables_to_process = [root]

    while tables_to_process:
        table = tables_to_process.pop()
        if table.collected:
            continue
        table.collected = True

        for record in records_by_table.get(table.name, []):
            if record.child_table == table.name:
                related_table = registry.get_or_create(record.parent_table)
                table.relations.append(TableRelation(table, Owner.SELF, related_table, record.cascades))
                tables_to_process.append(related_table)
            if record.parent_table == table.name:
                related_table = registry.get_or_create(record.child_table)
                table.relations.append(TableRelation(table, Owner.PARENT, related_table, record.cascades))
                tables_to_process.append(related_table)

        logger.debug(f"Collected {len(table.relations)} relations for table {table.name}")

    logger.info(f"Built relation graph for {start_table_name}: {len(registry)} tables reached")
    return root
