"""Utilities for the warehouse administration job."""

import os
import logging
from datetime import datetime
from typing import Dict, List, Optional

import pandas as pd
from snowflake.connector.errors import ProgrammingError

from data_utils.pythonic_utils import read_file_content
from prefect_jobs.warehouse_admin import statements
from prefect_jobs.warehouse_admin.models import SqlStatement
from prefect_jobs.warehouse_admin.config import (
    QUERIES_DIR,
    DATABASE,
    ADMIN_ROLE,
    ACCOUNT_ADMIN_ROLE,
    ANALYST_ROLE,
    WAREHOUSE_CONFIG,
    RESOURCE_MONITOR_CONFIG,
    WAREHOUSE_TIMEOUTS,
    ACCOUNT_TIMEOUTS,
    BASE_WAREHOUSE_SIZE,
    RESIZED_WAREHOUSE_SIZE,
    MENU_QUERY,
    ORDERS_QUERY,
    LOYALTY_QUERY,
    INVALID_STATE_ERRNO,
    INVALID_STATE_MESSAGE,
    UNSUPPORTED_FEATURE_MESSAGE,
)

logger = logging.getLogger(__name__)


def load_query(query_name: str, database: str = DATABASE) -> str:
    path = QUERIES_DIR / f'{query_name}.sql'
    return read_file_content(path).format(database=database).strip()


def is_invalid_state_error(error: Exception) -> bool:
    """Snowflake refuses to suspend a warehouse that is already suspended."""
    if not isinstance(error, ProgrammingError):
        return False
    return error.errno == INVALID_STATE_ERRNO or INVALID_STATE_MESSAGE in str(error)


def is_unsupported_feature_error(error: Exception) -> bool:
    """Raised e.g. for multi-cluster warehouses on Standard edition accounts."""
    return isinstance(error, ProgrammingError) and UNSUPPORTED_FEATURE_MESSAGE in str(error)


def find_row_by_name(rows: List[Dict], name: str) -> Optional[Dict]:
    """Pick the SHOW ... LIKE row for exactly this object.

    LIKE is case-insensitive and '_' matches any character, so e.g. tb_de_wh
    also matches TBXDEXWH.
    """
    return next((row for row in rows if str(row.get('name', '')).upper() == name.upper()), None)


def parameters_by_key(parameter_rows: List[Dict]) -> Dict[str, str]:
    """Map SHOW PARAMETERS output rows to {key: value}."""
    return {row['key']: row['value'] for row in parameter_rows}


def export_results_to_csv(dir_path: str, results: pd.DataFrame, query_name: str) -> Optional[str]:
    """Write query results to CSV and return the file path"""
    if results is None or results.empty:
        return None

    os.makedirs(dir_path, exist_ok=True)
    timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
    file_path = os.path.join(dir_path, f"{query_name}_{timestamp}.csv")
    try:
        results.to_csv(file_path, index=False)
        logger.info(f"Generated CSV file at: {file_path}")
        return file_path
    except OSError as e:
        logger.error(f"Failed to generate CSV file at {file_path}: {e}")
        return None


def build_walkthrough_script() -> List[SqlStatement]:
    """The full walkthrough in execution order, as run by warehouse_admin_flow."""
    warehouse = WAREHOUSE_CONFIG.name
    monitor = RESOURCE_MONITOR_CONFIG.name

    return [
        SqlStatement('Assume the admin role', statements.use_role(ADMIN_ROLE)),
        SqlStatement('Set the walkthrough database', statements.use_database(DATABASE)),
        SqlStatement(
            'Create the warehouse',
            statements.create_warehouse(WAREHOUSE_CONFIG),
            note=(
                'Multi-cluster warehouses need Enterprise edition or higher. On Standard edition '
                'this fails with "Unsupported feature"; drop MIN/MAX_CLUSTER_COUNT and SCALING_POLICY.'
            ),
        ),
        SqlStatement('Use the new warehouse', statements.use_warehouse(warehouse)),
        SqlStatement('Query the menu table', load_query(MENU_QUERY)),
        SqlStatement('Assume the account admin role', statements.use_role(ACCOUNT_ADMIN_ROLE)),
        SqlStatement('Create the resource monitor', statements.create_resource_monitor(RESOURCE_MONITOR_CONFIG)),
        SqlStatement('Attach the resource monitor', statements.attach_resource_monitor(warehouse, monitor)),
        SqlStatement('Set warehouse statement timeouts', statements.set_warehouse_timeouts(warehouse, WAREHOUSE_TIMEOUTS)),
        SqlStatement('Set account statement timeouts', statements.alter_account_set(ACCOUNT_TIMEOUTS)),
        SqlStatement('Check warehouse parameters', statements.show_parameters_in_warehouse(warehouse)),
        SqlStatement('Assume the analyst role', statements.use_role(ANALYST_ROLE)),
        SqlStatement('Use the warehouse as analyst', statements.use_warehouse(warehouse)),
        SqlStatement('Sales by truck brand', load_query(ORDERS_QUERY)),
        SqlStatement('Scale the warehouse up', statements.resize_warehouse(warehouse, RESIZED_WAREHOUSE_SIZE)),
        SqlStatement('Sales by truck brand, scaled up', load_query(ORDERS_QUERY)),
        SqlStatement('Scale the warehouse down', statements.resize_warehouse(warehouse, BASE_WAREHOUSE_SIZE)),
        SqlStatement('Customer loyalty metrics', load_query(LOYALTY_QUERY)),
        SqlStatement(
            'Suspend the warehouse',
            statements.suspend_warehouse(warehouse),
            note='Fails with "Invalid state" if auto-suspend already suspended the warehouse.',
        ),
        SqlStatement('Check warehouse state', statements.show_warehouses(like=warehouse)),
        SqlStatement('Check warehouse parameters', statements.show_parameters_in_warehouse(warehouse)),
        SqlStatement('Assume the account admin role for cleanup', statements.use_role(ACCOUNT_ADMIN_ROLE)),
        SqlStatement('Drop the warehouse', statements.drop_warehouse(warehouse)),
        SqlStatement('Drop the resource monitor', statements.drop_resource_monitor(monitor)),
        SqlStatement('Restore account timeout defaults', statements.alter_account_unset_timeouts()),
    ]


def render_script(script: List[SqlStatement]) -> str:
    blocks = []
    for number, statement in enumerate(script, start=1):
        header = [f'-- {number}. {statement.title}']
        if statement.note:
            header.append(f'-- NOTE: {statement.note}')
        sql = statement.sql if statement.sql.endswith(';') else f'{statement.sql};'
        blocks.append('\n'.join(header + [sql]))
    return '\n\n'.join(blocks) + '\n'
