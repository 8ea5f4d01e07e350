from typing import Iterable, List, Union
from .db_graph import Owner, RelationRecord, Table, TableRelation, TableRegistry, build_relation_graph
import logging

logger = logging.getLogger(__name__)


class SafeResult:
    safe = True

    def __repr__(self):
        return "SafeResult()"


class UnsafeResult:
    safe = False

    def __init__(self, relation: TableRelation, chain: List[str]):
        self.relation = relation
        self.chain = chain

    @property
    def parent_table(self) -> str:
        return self.relation.origin.name

    @property
    def child_table(self) -> str:
        return self.relation.table.name

    def __repr__(self):
        return f"UnsafeResult({self.parent_table!r} -> {self.child_table!r}, chain={self.chain!r})"


def find_non_cascading(root: Table) -> Union[SafeResult, UnsafeResult]:
    """
    Find the first relation that would block deleting a row of ``root``.

    Only relations where another table references the current one are
    followed. Cascading ones are walked depth-first in the order they were
    collected; each table is entered at most once per call. The returned chain
    lists table names from ``root`` down to the blocked child table.
    """
    visited = {root}
    stack = [(root, iter(root.relations))]

    while stack:
        table, relations = stack[-1]
        for relation in relations:
            if relation.owner != Owner.PARENT:
                continue

            if not relation.cascades:
                chain = [entry.name for entry, _ in stack]
                chain.append(relation.table.name)
                logger.info(f"Non-cascading relation {relation} blocks deletion from {root.name}")
                return UnsafeResult(relation, chain)

            if relation.table in visited:
                continue
            visited.add(relation.table)
            stack.append((relation.table, iter(relation.table.relations)))
            break
        else:
            stack.pop()

    logger.info(f"All relations below {root.name} cascade ({len(visited)} tables checked)")
    return SafeResult()


def analyze(records: Iterable[RelationRecord], table_name: str) -> Union[SafeResult, UnsafeResult]:
    root = build_relation_graph(records, table_name, TableRegistry())
    return find_non_cascading(root)
