import sys
from pathlib import Path
from unittest import mock

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'scripts'))

import warehouse_walkthrough  # noqa: E402


def test_render_writes_script(tmp_path):
    output = tmp_path / 'walkthrough.sql'
    assert warehouse_walkthrough.main(['render', '--output', str(output)]) == 0

    script = output.read_text()
    assert 'CREATE OR REPLACE WAREHOUSE' in script
    assert 'CREATE OR REPLACE RESOURCE MONITOR' in script
    assert 'ALTER ACCOUNT UNSET' in script


def test_render_prints_script(capsys):
    assert warehouse_walkthrough.main(['render']) == 0
    assert capsys.readouterr().out.startswith('-- 1. ')


def test_run_passes_options_to_flow():
    summary = {'status': 'success', 'queries': [
        {'label': 'menu_items', 'number_of_rows': 5, 'query_time_taken': 0.4},
    ]}
    with mock.patch('prefect_jobs.warehouse_admin.main.warehouse_admin_flow', return_value=summary) as flow:
        assert warehouse_walkthrough.main(['run', '--skip-teardown', '--export-dir', '/tmp/exports']) == 0
    flow.assert_called_once_with(skip_teardown=True, export_dir='/tmp/exports')


def test_command_is_required():
    with pytest.raises(SystemExit):
        warehouse_walkthrough.main([])


def test_run_propagates_flow_failure():
    with mock.patch('prefect_jobs.warehouse_admin.main.warehouse_admin_flow', side_effect=RuntimeError('boom')):
        with pytest.raises(RuntimeError, match='boom'):
            warehouse_walkthrough.main(['run'])
