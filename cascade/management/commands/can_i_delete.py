from contextlib import nullcontext
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connections
from cascade.graph_processor import analyze
from cascade.report import render_report
from cascade.schema_mapper import (
    SchemaMappingError, database_file_connection, fetch_relation_records, resolve_table_name,
)
import logging

logger = logging.getLogger(__name__)

USAGE = "can_i_delete <db-file> <target-table> | can_i_delete --database <alias> <target-table>"


class Command(BaseCommand):
    help = 'Checks whether deleting rows from a table cascades through every foreign key depending on it'

    def add_arguments(self, parser):
        parser.add_argument('targets', nargs='*',
                            help='SQLite database file followed by the table to check')
        parser.add_argument('--database', dest='database',
                            help='Check a connection configured in settings instead of a database file')

    def handle(self, *args, **options):
        targets = options['targets']
        alias = options['database']

        expected = 1 if alias else 2
        if len(targets) != expected:
            raise CommandError(f"Usage: {USAGE}", returncode=1)
        table_name = targets[-1]

        try:
            with self._open(alias, targets[0]) as connection:
                resolved_name = resolve_table_name(connection, table_name)
                if resolved_name is None:
                    raise CommandError(f"Table not found: {table_name}", returncode=1)
                table_name = resolved_name
                records = fetch_relation_records(connection)
        except SchemaMappingError as e:
            raise CommandError(str(e), returncode=1)
        except DatabaseError as e:
            raise CommandError(f"Could not read the schema: {e}", returncode=1)

        result = analyze(records, table_name)
        lines = render_report(result)

        if result.safe:
            self.stdout.write(self.style.SUCCESS(lines[0]))
            return

        for line in lines:
            self.stdout.write(line)
        raise CommandError(f"Deleting rows from '{table_name}' can be rejected by a foreign key constraint.",
                           returncode=1)

    def _open(self, alias, db_file):
        if alias:
            if alias not in connections:
                raise CommandError(f"Database alias not configured: {alias}", returncode=1)
            logger.info(f"Checking configured database '{alias}'")
            return nullcontext(connections[alias])
        logger.info(f"Checking database file {db_file}")
        return database_file_connection(db_file)
