"""Configuration for the warehouse administration job."""

import os
from pathlib import Path

from project_utils import ENV
from prefect_jobs.warehouse_admin.models import (
    WarehouseConfig,
    ResourceMonitorConfig,
    MonitorTrigger,
    TimeoutSettings,
    TriggerAction,
)

# Snowflake connection
# Local: credentials from environment / .env
# Other envs: credentials from AWS Secrets Manager ({ENV}/snowflake/prefect)
SNOWFLAKE_ACCOUNT = os.environ.get("SNOWFLAKE_ACCOUNT")
SNOWFLAKE_USER = os.environ.get("SNOWFLAKE_USER")
SNOWFLAKE_PASSWORD = os.environ.get("SNOWFLAKE_PASSWORD")
SNOWFLAKE_SECRET_NAME = "snowflake/prefect"

# Walkthrough database and roles
DATABASE = os.environ.get("WALKTHROUGH_DATABASE", "tb_101")
ADMIN_ROLE = os.environ.get("WALKTHROUGH_ADMIN_ROLE", "tb_admin")
ACCOUNT_ADMIN_ROLE = os.environ.get("WALKTHROUGH_ACCOUNT_ADMIN_ROLE", "accountadmin")
ANALYST_ROLE = os.environ.get("WALKTHROUGH_ANALYST_ROLE", "tb_dev")

# Warehouse
WAREHOUSE_NAME = os.environ.get("WALKTHROUGH_WAREHOUSE", "tb_de_wh")
BASE_WAREHOUSE_SIZE = "XSMALL"
RESIZED_WAREHOUSE_SIZE = "XLARGE"

WAREHOUSE_CONFIG = WarehouseConfig(
    name=WAREHOUSE_NAME,
    warehouse_type="STANDARD",
    warehouse_size=BASE_WAREHOUSE_SIZE,
    min_cluster_count=1,
    max_cluster_count=2,
    scaling_policy="STANDARD",
    auto_suspend=60,
    auto_resume=True,
    initially_suspended=True,
    comment="data engineering warehouse for tasty bytes",
)

# Resource monitor
RESOURCE_MONITOR_CONFIG = ResourceMonitorConfig(
    name=os.environ.get("WALKTHROUGH_RESOURCE_MONITOR", "tb_test_rm"),
    credit_quota=int(os.environ.get("WALKTHROUGH_CREDIT_QUOTA", 100)),
    frequency="MONTHLY",
    start_timestamp="IMMEDIATELY",
    triggers=[
        MonitorTrigger(percent=75, action=TriggerAction.NOTIFY),
        MonitorTrigger(percent=100, action=TriggerAction.SUSPEND),
        MonitorTrigger(percent=110, action=TriggerAction.SUSPEND_IMMEDIATE),
    ],
)

# Timeouts
WAREHOUSE_TIMEOUTS = TimeoutSettings(
    statement_timeout_in_seconds=1800,  # 30 minutes
    statement_queued_timeout_in_seconds=600,  # 10 minutes
)
ACCOUNT_TIMEOUTS = TimeoutSettings(
    statement_timeout_in_seconds=18000,  # 5 hours
    statement_queued_timeout_in_seconds=3600,  # 1 hour
)

# Sample queries (file name without .sql under queries/)
QUERIES_DIR = Path(__file__).parent / "queries"
MENU_QUERY = "menu_items"
ORDERS_QUERY = "orders_by_truck_brand"
LOYALTY_QUERY = "customer_loyalty_metrics"

# Expected platform errors
INVALID_STATE_ERRNO = 90064
INVALID_STATE_MESSAGE = "Invalid state"
UNSUPPORTED_FEATURE_MESSAGE = "Unsupported feature"

# Optional CSV export of sample query results
EXPORT_DIR = os.environ.get("WALKTHROUGH_EXPORT_DIR")
