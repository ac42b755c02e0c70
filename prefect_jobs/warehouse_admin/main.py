"""Warehouse administration walkthrough: Prefect Job.

Runs the Snowflake warehouse administration walkthrough end to end over a
single session:
1. Create a warehouse and run a first query on it
2. Create a resource monitor and attach it to the warehouse
3. Set statement timeouts on the warehouse and on the account
4. Run sample analytic queries, resizing the warehouse up and back down
5. Suspend the warehouse and inspect its state and parameters
6. Teardown - drop the warehouse and monitor, restore account timeout defaults

Credit accounting, auto-suspend/resume and timeout cancellation are all done
by Snowflake; this job only issues the statements.
"""

from prefect import flow, get_run_logger

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin.config import (
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
    EXPORT_DIR,
)
from prefect_jobs.warehouse_admin.drivers import init_snowflake_driver
from prefect_jobs.warehouse_admin.tasks.warehouse import (
    use_context_task,
    create_warehouse_task,
    use_warehouse_task,
    resize_warehouse_task,
    suspend_warehouse_task,
    show_warehouse_task,
    show_warehouse_parameters_task,
)
from prefect_jobs.warehouse_admin.tasks.resource_monitor import (
    create_resource_monitor_task,
    attach_resource_monitor_task,
    show_resource_monitor_task,
)
from prefect_jobs.warehouse_admin.tasks.timeouts import (
    set_warehouse_timeouts_task,
    set_account_timeouts_task,
    verify_warehouse_timeouts_task,
)
from prefect_jobs.warehouse_admin.tasks.analytics import run_sample_query_task
from prefect_jobs.warehouse_admin.tasks.teardown import teardown_task, TeardownError


def _run_teardown(
    snowflake_driver: SnowflakeDriver, summary: dict, raise_on_failure: bool, restore_account_timeouts: bool
):
    logger = get_run_logger()
    try:
        summary['teardown'] = teardown_task(
            snowflake_driver, ACCOUNT_ADMIN_ROLE, WAREHOUSE_CONFIG.name, RESOURCE_MONITOR_CONFIG.name,
            restore_account_timeouts=restore_account_timeouts,
        )
    except TeardownError as err:
        summary['teardown_failures'] = err.failures
        if raise_on_failure:
            raise
        # the walkthrough already failed; keep its error as the one raised
        logger.error(f'teardown after failed walkthrough did not complete: {err}')


@flow(name="warehouse_admin_flow", log_prints=True)
def warehouse_admin_flow(skip_teardown: bool = False, export_dir: str | None = None):
    """Run the warehouse administration walkthrough.

    Args:
        skip_teardown: Leave the warehouse, monitor and account timeouts in place.
        export_dir: Directory for CSV exports of the sample queries. Defaults to
                    WALKTHROUGH_EXPORT_DIR; no export if neither is set.
    """
    logger = get_run_logger()
    logger.info("Starting warehouse administration walkthrough flow")

    export_dir = export_dir or EXPORT_DIR
    warehouse = WAREHOUSE_CONFIG.name
    summary = {"status": "running", "warehouse": warehouse, "queries": []}
    warehouse_created = False
    account_timeouts_set = False

    snowflake_driver = init_snowflake_driver()
    try:
        # Warehouse
        use_context_task(snowflake_driver, ADMIN_ROLE, DATABASE)
        applied_config = create_warehouse_task(snowflake_driver, WAREHOUSE_CONFIG)
        warehouse_created = True
        summary["multi_cluster"] = applied_config.is_multi_cluster
        use_warehouse_task(snowflake_driver, warehouse)
        summary["queries"].append(run_sample_query_task(snowflake_driver, MENU_QUERY, export_dir=export_dir))

        # Resource monitor and timeouts
        use_context_task(snowflake_driver, ACCOUNT_ADMIN_ROLE)
        create_resource_monitor_task(snowflake_driver, RESOURCE_MONITOR_CONFIG)
        attach_resource_monitor_task(snowflake_driver, warehouse, RESOURCE_MONITOR_CONFIG.name)
        show_resource_monitor_task(snowflake_driver, RESOURCE_MONITOR_CONFIG.name)
        set_warehouse_timeouts_task(snowflake_driver, warehouse, WAREHOUSE_TIMEOUTS)
        set_account_timeouts_task(snowflake_driver, ACCOUNT_TIMEOUTS)
        account_timeouts_set = True
        summary["timeout_mismatches"] = verify_warehouse_timeouts_task(snowflake_driver, warehouse, WAREHOUSE_TIMEOUTS)

        # Analytics, before and after scaling up
        use_context_task(snowflake_driver, ANALYST_ROLE)
        use_warehouse_task(snowflake_driver, warehouse)
        summary["queries"].append(run_sample_query_task(
            snowflake_driver, ORDERS_QUERY, label=f"{ORDERS_QUERY}_{BASE_WAREHOUSE_SIZE.lower()}", export_dir=export_dir
        ))
        resize_warehouse_task(snowflake_driver, warehouse, RESIZED_WAREHOUSE_SIZE)
        summary["queries"].append(run_sample_query_task(
            snowflake_driver, ORDERS_QUERY, label=f"{ORDERS_QUERY}_{RESIZED_WAREHOUSE_SIZE.lower()}", export_dir=export_dir
        ))
        resize_warehouse_task(snowflake_driver, warehouse, BASE_WAREHOUSE_SIZE)
        summary["queries"].append(run_sample_query_task(snowflake_driver, LOYALTY_QUERY, export_dir=export_dir))

        # Suspend and inspect
        summary["suspended_by_job"] = suspend_warehouse_task(snowflake_driver, warehouse)
        warehouse_state = show_warehouse_task(snowflake_driver, warehouse)
        summary["warehouse_state"] = warehouse_state.get("state") if warehouse_state else None
        summary["parameters"] = len(show_warehouse_parameters_task(snowflake_driver, warehouse))

        summary["status"] = "success"
        logger.info("Successfully completed warehouse administration walkthrough")

    except Exception as e:
        summary["status"] = "failed"
        logger.error(f"Error in warehouse administration walkthrough flow: {e}")
        raise

    finally:
        if warehouse_created and not skip_teardown:
            _run_teardown(
                snowflake_driver,
                summary,
                raise_on_failure=summary["status"] == "success",
                restore_account_timeouts=account_timeouts_set,
            )
        elif skip_teardown:
            logger.info(f"skipping teardown: {warehouse} and {RESOURCE_MONITOR_CONFIG.name} are left in place")
        snowflake_driver.close()

    return summary


@flow(name="warehouse_teardown_flow", log_prints=True)
def warehouse_teardown_flow():
    """Drop the walkthrough objects and restore account defaults, e.g. after a run with skip_teardown."""
    logger = get_run_logger()
    logger.info("Starting warehouse teardown flow")
    snowflake_driver = init_snowflake_driver()
    try:
        return teardown_task(
            snowflake_driver, ACCOUNT_ADMIN_ROLE, WAREHOUSE_CONFIG.name, RESOURCE_MONITOR_CONFIG.name
        )
    finally:
        snowflake_driver.close()


if __name__ == "__main__":
    warehouse_admin_flow()
