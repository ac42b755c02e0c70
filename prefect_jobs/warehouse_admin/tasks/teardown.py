"""Cleanup: drop the objects the walkthrough created and restore account defaults.

Each step runs even if an earlier one failed; failures are reported together
at the end.
"""

from typing import List
from prefect import task, get_run_logger
from prefect.cache_policies import NONE

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin import statements


class TeardownError(Exception):
    def __init__(self, failures: List[str]):
        self.failures = failures
        super().__init__(f'{len(failures)} teardown steps failed: {"; ".join(failures)}')

    def __reduce__(self):
        return self.__class__, (self.failures,)


@task(cache_policy=NONE)
def teardown_task(
    snowflake_driver: SnowflakeDriver, role: str, warehouse: str, monitor: str, restore_account_timeouts: bool = True
) -> List[str]:
    """Drop the warehouse and monitor; unset account timeouts only if restore_account_timeouts."""
    logger = get_run_logger()
    logger.info(f'tearing down warehouse {warehouse} and resource monitor {monitor}')

    steps = [
        ('use role', statements.use_role(role)),
        ('drop warehouse', statements.drop_warehouse(warehouse)),
        ('drop resource monitor', statements.drop_resource_monitor(monitor)),
    ]
    if restore_account_timeouts:
        steps.append(('restore account timeouts', statements.alter_account_unset_timeouts()))
    else:
        logger.info('account timeouts were not changed; leaving them as they are')
    completed, failures = [], []
    for step_name, statement in steps:
        try:
            snowflake_driver.execute(statement)
            completed.append(step_name)
            logger.info(f'-- {step_name}: done')
        except Exception as err:
            logger.error(f'-- {step_name} failed: {err}')
            failures.append(f'{step_name}: {err}')

    if failures:
        raise TeardownError(failures)
    logger.info('teardown completed')
    return completed
