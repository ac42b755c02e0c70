"""Warehouse lifecycle tasks: create, use, resize, suspend, inspect."""

from typing import Dict, List, Optional
from prefect import task, get_run_logger
from prefect.cache_policies import NONE

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin import statements
from prefect_jobs.warehouse_admin.models import WarehouseConfig
from prefect_jobs.warehouse_admin.utils import (
    find_row_by_name,
    is_invalid_state_error,
    is_unsupported_feature_error,
)


@task(cache_policy=NONE)
def use_context_task(snowflake_driver: SnowflakeDriver, role: str, database: Optional[str] = None):
    logger = get_run_logger()
    logger.info(f'using role: {role}' + (f', database: {database}' if database else ''))
    snowflake_driver.execute(statements.use_role(role))
    if database:
        snowflake_driver.execute(statements.use_database(database))


@task(cache_policy=NONE)
def create_warehouse_task(snowflake_driver: SnowflakeDriver, config: WarehouseConfig) -> WarehouseConfig:
    """Create the warehouse, falling back to a single cluster where multi-cluster is not enabled.

    Returns the configuration that was actually applied.
    """
    logger = get_run_logger()
    logger.info(f'creating warehouse {config.name} ({config.warehouse_size}, '
                f'{config.min_cluster_count}-{config.max_cluster_count} clusters)')
    try:
        snowflake_driver.execute(statements.create_warehouse(config))
        logger.info(f'created warehouse {config.name}')
        return config
    except Exception as err:
        if not (config.is_multi_cluster and is_unsupported_feature_error(err)):
            raise
        logger.warning(f'multi-cluster warehouses are not enabled on this account ({err}). '
                       f'creating {config.name} as a single-cluster warehouse')

    single_cluster_config = config.as_single_cluster()
    snowflake_driver.execute(statements.create_warehouse(single_cluster_config))
    logger.info(f'created single-cluster warehouse {config.name}')
    return single_cluster_config


@task(cache_policy=NONE)
def use_warehouse_task(snowflake_driver: SnowflakeDriver, name: str):
    logger = get_run_logger()
    logger.info(f'using warehouse: {name}')
    snowflake_driver.execute(statements.use_warehouse(name))


@task(cache_policy=NONE)
def resize_warehouse_task(snowflake_driver: SnowflakeDriver, name: str, size: str):
    logger = get_run_logger()
    logger.info(f'resizing warehouse {name} to {size}')
    snowflake_driver.execute(statements.resize_warehouse(name, size))


@task(cache_policy=NONE)
def suspend_warehouse_task(snowflake_driver: SnowflakeDriver, name: str) -> bool:
    """Suspend the warehouse. Returns False if it was already suspended."""
    logger = get_run_logger()
    logger.info(f'suspending warehouse {name}')
    try:
        snowflake_driver.execute(statements.suspend_warehouse(name))
    except Exception as err:
        if not is_invalid_state_error(err):
            raise
        logger.info(f'warehouse {name} is already suspended: {err}')
        return False
    logger.info(f'suspended warehouse {name}')
    return True


@task(cache_policy=NONE)
def show_warehouse_task(snowflake_driver: SnowflakeDriver, name: str) -> Optional[Dict]:
    logger = get_run_logger()
    rows = snowflake_driver.get_query_results(statements.show_warehouses(like=name))
    warehouse = find_row_by_name(rows, name)
    if warehouse is None:
        logger.warning(f'warehouse {name} not found')
        return None
    logger.info(f"warehouse {warehouse.get('name')}: state={warehouse.get('state')} size={warehouse.get('size')} "
                f"resource_monitor={warehouse.get('resource_monitor')}")
    return warehouse


@task(cache_policy=NONE)
def show_warehouse_parameters_task(snowflake_driver: SnowflakeDriver, name: str) -> List[Dict]:
    logger = get_run_logger()
    rows = snowflake_driver.get_query_results(statements.show_parameters_in_warehouse(name))
    logger.info(f'warehouse {name} has {len(rows)} parameters')
    for row in rows:
        logger.info(f"  {row['key']} = {row['value']} (level: {row.get('level') or 'default'})")
    return rows
