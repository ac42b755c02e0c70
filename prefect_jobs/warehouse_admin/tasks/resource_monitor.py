from typing import Dict, Optional
from prefect import task, get_run_logger
from prefect.cache_policies import NONE

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin import statements
from prefect_jobs.warehouse_admin.models import ResourceMonitorConfig
from prefect_jobs.warehouse_admin.utils import find_row_by_name


@task(cache_policy=NONE)
def create_resource_monitor_task(snowflake_driver: SnowflakeDriver, config: ResourceMonitorConfig):
    logger = get_run_logger()
    triggers = ', '.join(f'{t.percent}% -> {t.action.value}' for t in config.triggers)
    logger.info(f'creating resource monitor {config.name}: {config.credit_quota} credits '
                f'{config.frequency.value.lower()}, triggers: {triggers or "none"}')
    snowflake_driver.execute(statements.create_resource_monitor(config))


@task(cache_policy=NONE)
def attach_resource_monitor_task(snowflake_driver: SnowflakeDriver, warehouse: str, monitor: str):
    logger = get_run_logger()
    logger.info(f'attaching resource monitor {monitor} to warehouse {warehouse}')
    snowflake_driver.execute(statements.attach_resource_monitor(warehouse, monitor))


@task(cache_policy=NONE)
def show_resource_monitor_task(snowflake_driver: SnowflakeDriver, monitor: str) -> Optional[Dict]:
    logger = get_run_logger()
    rows = snowflake_driver.get_query_results(statements.show_resource_monitors(like=monitor))
    resource_monitor = find_row_by_name(rows, monitor)
    if resource_monitor is None:
        logger.warning(f'resource monitor {monitor} not found')
        return None
    logger.info(f"resource monitor {resource_monitor.get('name')}: quota={resource_monitor.get('credit_quota')} "
                f"used={resource_monitor.get('used_credits')} frequency={resource_monitor.get('frequency')}")
    return resource_monitor
