import os
import sys

PROG_NAME = 'can-i-delete'


def main(argv=None):
    """
    Entry point of the ``can-i-delete`` console script.

    Runs the ``can_i_delete`` management command under its own program name.
    Every failure, argument errors included, exits with status 1.
    """
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')
    import django
    from django.core.management.base import CommandError
    from django.db import connections

    django.setup()
    from cascade.management.commands.can_i_delete import Command

    if argv is None:
        argv = sys.argv[1:]

    command = Command()
    parser = command.create_parser(PROG_NAME, 'can_i_delete')
    parser.prog = PROG_NAME
    try:
        options = vars(parser.parse_args(argv))
        args = options.pop('args', ())
        command.execute(*args, **options)
    except CommandError as e:
        command.stderr.write(f"{e.__class__.__name__}: {e}")
        sys.exit(e.returncode)
    finally:
        connections.close_all()
    return 0


if __name__ == '__main__':
    sys.exit(main())
