from typing import Dict
from prefect import task, get_run_logger
from prefect.cache_policies import NONE

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin import statements
from prefect_jobs.warehouse_admin.models import TimeoutSettings
from prefect_jobs.warehouse_admin.utils import parameters_by_key


@task(cache_policy=NONE)
def set_warehouse_timeouts_task(snowflake_driver: SnowflakeDriver, warehouse: str, timeouts: TimeoutSettings):
    logger = get_run_logger()
    logger.info(f'setting timeouts on warehouse {warehouse}: {timeouts.as_parameters()}')
    snowflake_driver.execute(statements.set_warehouse_timeouts(warehouse, timeouts))


@task(cache_policy=NONE)
def set_account_timeouts_task(snowflake_driver: SnowflakeDriver, timeouts: TimeoutSettings):
    logger = get_run_logger()
    logger.info(f'setting account timeouts: {timeouts.as_parameters()}')
    snowflake_driver.execute(statements.alter_account_set(timeouts))


@task(cache_policy=NONE)
def verify_warehouse_timeouts_task(snowflake_driver: SnowflakeDriver, warehouse: str, timeouts: TimeoutSettings) -> Dict:
    """Compare the warehouse's timeout parameters against the expected values.

    Returns {parameter: actual value} for every parameter that does not match.
    """
    logger = get_run_logger()
    actual = parameters_by_key(
        snowflake_driver.get_query_results(statements.show_parameters_in_warehouse(warehouse))
    )
    mismatches = {}
    for key, expected in timeouts.as_parameters().items():
        value = actual.get(key)
        if value is None or str(value) != str(expected):
            mismatches[key] = value

    if mismatches:
        logger.warning(f'warehouse {warehouse} timeouts differ from expected: {mismatches}')
    else:
        logger.info(f'warehouse {warehouse} timeouts verified')
    return mismatches
