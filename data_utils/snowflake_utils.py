"""Snowflake driver shared by the Prefect jobs.

Thin wrapper over snowflake-connector-python. A single connection is opened
lazily and reused for every statement, so session state set with
USE ROLE / USE DATABASE / USE WAREHOUSE carries over between calls.
"""

import os
import logging
from typing import Dict, List, Optional

import pandas as pd
import snowflake.connector
from snowflake.connector import DictCursor

logger = logging.getLogger(__name__)


class SnowflakeDriver:
    def __init__(
        self,
        username: str,
        password: str,
        account: Optional[str] = None,
        warehouse: Optional[str] = None,
        database: Optional[str] = None,
        schema: Optional[str] = None,
        role: Optional[str] = None,
    ):
        self.username = username
        self.password = password
        self.account = account or os.environ.get("SNOWFLAKE_ACCOUNT")
        self.warehouse = warehouse
        self.database = database
        self.schema = schema
        self.role = role
        self._conn = None

    @property
    def conn(self):
        if self._conn is None or self._conn.is_closed():
            logger.info(f"connecting to Snowflake account {self.account} as {self.username}")
            connect_params = {
                "user": self.username,
                "password": self.password,
                "account": self.account,
                "warehouse": self.warehouse,
                "database": self.database,
                "schema": self.schema,
                "role": self.role,
            }
            self._conn = snowflake.connector.connect(
                **{key: value for key, value in connect_params.items() if value is not None}
            )
        return self._conn

    def execute(self, query: str) -> str:
        """Run a statement and return its Snowflake query id."""
        logger.debug(f"executing: {query}")
        with self.conn.cursor() as cursor:
            cursor.execute(query)
            return cursor.sfqid

    def get_query_results(self, query: str) -> List[Dict]:
        logger.debug(f"fetching results for: {query}")
        with self.conn.cursor(DictCursor) as cursor:
            cursor.execute(query)
            return cursor.fetchall()

    def get_query_results_as_df(self, query: str) -> pd.DataFrame:
        with self.conn.cursor() as cursor:
            cursor.execute(query)
            return cursor.fetch_pandas_all()

    def close(self):
        if self._conn is not None and not self._conn.is_closed():
            self._conn.close()
        self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
