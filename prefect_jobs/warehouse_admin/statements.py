"""SQL builders for the Snowflake administrative statements used by the job.

Every function returns the statement text only; nothing here talks to
Snowflake. Object names are validated as unquoted Snowflake identifiers and
string values are emitted as single-quoted literals.
"""

import re
from typing import Dict, Union

from prefect_jobs.warehouse_admin.models import (
    WarehouseConfig,
    ResourceMonitorConfig,
    TimeoutSettings,
    normalize_warehouse_size,
)

_IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_$]*$')
_INDENT = ' ' * 4

TIMEOUT_PARAMETERS = ['STATEMENT_TIMEOUT_IN_SECONDS', 'STATEMENT_QUEUED_TIMEOUT_IN_SECONDS']


def identifier(name: str) -> str:
    if not name or not _IDENTIFIER_PATTERN.match(name):
        raise ValueError(f'invalid Snowflake identifier: {name!r}')
    return name


def literal(value: str) -> str:
    escaped = value.replace('\\', '\\\\').replace("'", "\\'")
    return f"'{escaped}'"


def format_value(value: Union[bool, int, float, str, None]) -> str:
    # bool first: True is also an int
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if value is None:
        return 'NULL'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return literal(value)


def _assignments(properties: Dict, separator: str) -> str:
    return separator.join(f'{key} = {format_value(value)}' for key, value in properties.items())


# Context

def use_role(role: str) -> str:
    return f'USE ROLE {identifier(role)}'


def use_database(database: str) -> str:
    return f'USE DATABASE {identifier(database)}'


def use_warehouse(name: str) -> str:
    return f'USE WAREHOUSE {identifier(name)}'


# Warehouses

def create_warehouse(config: WarehouseConfig, or_replace: bool = True) -> str:
    properties = {
        'WAREHOUSE_TYPE': config.warehouse_type.value,
        'WAREHOUSE_SIZE': config.warehouse_size,
    }
    # multi-cluster properties are rejected on Standard edition accounts, even at 1
    if config.is_multi_cluster:
        properties['MIN_CLUSTER_COUNT'] = config.min_cluster_count
        properties['MAX_CLUSTER_COUNT'] = config.max_cluster_count
        if config.scaling_policy is not None:
            properties['SCALING_POLICY'] = config.scaling_policy.value
    properties['AUTO_SUSPEND'] = config.auto_suspend
    properties['AUTO_RESUME'] = config.auto_resume
    properties['INITIALLY_SUSPENDED'] = config.initially_suspended
    if config.comment:
        properties['COMMENT'] = config.comment

    create = 'CREATE OR REPLACE WAREHOUSE' if or_replace else 'CREATE WAREHOUSE IF NOT EXISTS'
    body = _assignments(properties, separator=f'\n{_INDENT}')
    return f'{create} {identifier(config.name)}\n{_INDENT}{body}'


def alter_warehouse_set(name: str, properties: Dict) -> str:
    if not properties:
        raise ValueError('no warehouse properties to set')
    return f'ALTER WAREHOUSE {identifier(name)} SET {_assignments(properties, separator=" ")}'


def resize_warehouse(name: str, size: str) -> str:
    return alter_warehouse_set(name, {'WAREHOUSE_SIZE': normalize_warehouse_size(size)})


def set_warehouse_timeouts(name: str, timeouts: TimeoutSettings) -> str:
    return alter_warehouse_set(name, timeouts.as_parameters())


def suspend_warehouse(name: str) -> str:
    return f'ALTER WAREHOUSE {identifier(name)} SUSPEND'


def drop_warehouse(name: str, if_exists: bool = True) -> str:
    if_exists_clause = 'IF EXISTS ' if if_exists else ''
    return f'DROP WAREHOUSE {if_exists_clause}{identifier(name)}'


def show_warehouses(like: str = None) -> str:
    return 'SHOW WAREHOUSES' + (f' LIKE {literal(like)}' if like else '')


def show_parameters_in_warehouse(name: str) -> str:
    return f'SHOW PARAMETERS IN WAREHOUSE {identifier(name)}'


# Resource monitors

def create_resource_monitor(config: ResourceMonitorConfig, or_replace: bool = True) -> str:
    if config.start_timestamp.upper() == 'IMMEDIATELY':
        start_timestamp = 'IMMEDIATELY'
    else:
        start_timestamp = literal(config.start_timestamp)

    lines = [
        f'{"CREATE OR REPLACE" if or_replace else "CREATE"} RESOURCE MONITOR {identifier(config.name)}',
        f'{_INDENT}WITH CREDIT_QUOTA = {format_value(config.credit_quota)}',
        f'{_INDENT}FREQUENCY = {config.frequency.value}',
        f'{_INDENT}START_TIMESTAMP = {start_timestamp}',
    ]
    if config.triggers:
        lines.append(f'{_INDENT}TRIGGERS')
        for trigger in sorted(config.triggers, key=lambda t: t.percent):
            lines.append(f'{_INDENT * 2}ON {trigger.percent} PERCENT DO {trigger.action.value}')
    return '\n'.join(lines)


def attach_resource_monitor(warehouse: str, monitor: str) -> str:
    return f'ALTER WAREHOUSE {identifier(warehouse)} SET RESOURCE_MONITOR = {identifier(monitor)}'


def show_resource_monitors(like: str = None) -> str:
    return 'SHOW RESOURCE MONITORS' + (f' LIKE {literal(like)}' if like else '')


def drop_resource_monitor(name: str, if_exists: bool = True) -> str:
    if_exists_clause = 'IF EXISTS ' if if_exists else ''
    return f'DROP RESOURCE MONITOR {if_exists_clause}{identifier(name)}'


# Account

def alter_account_set(timeouts: TimeoutSettings) -> str:
    return f'ALTER ACCOUNT SET {_assignments(timeouts.as_parameters(), separator=" ")}'


def alter_account_unset_timeouts() -> str:
    return f'ALTER ACCOUNT UNSET {", ".join(TIMEOUT_PARAMETERS)}'
