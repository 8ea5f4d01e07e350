import pytest

from core.cli import main
from cascade.report import SAFE_MESSAGE


def test_safe_table_exits_zero(shop_database, capsys):
    assert main([str(shop_database), 'order_items']) == 0
    assert capsys.readouterr().out.strip() == SAFE_MESSAGE


def test_unsafe_table_exits_one(shop_database, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(shop_database), 'customers'])
    assert excinfo.value.code == 1

    captured = capsys.readouterr()
    assert captured.out.splitlines()[-3:] == ['customers', '  └ orders', '    └ order_items']
    assert 'CommandError' in captured.err


def test_missing_file_exits_one(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'nope.db'), 'customers'])
    assert excinfo.value.code == 1
    assert 'Database file not found' in capsys.readouterr().err


def test_unknown_table_exits_one(shop_database, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(shop_database), 'suppliers'])
    assert excinfo.value.code == 1
    assert 'Table not found: suppliers' in capsys.readouterr().err


@pytest.mark.parametrize('argv', [[], ['only-one-argument']])
def test_missing_arguments_exit_one_with_usage(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert 'Usage: can_i_delete <db-file> <target-table>' in capsys.readouterr().err


def test_unknown_option_exits_one(shop_database, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--bogus', str(shop_database), 'customers'])
    assert excinfo.value.code == 1


def test_help_uses_program_name(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--help'])
    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith('usage: can-i-delete ')
    assert 'can_i_delete' not in out.splitlines()[0]
