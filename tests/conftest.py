import pytest
import pandas as pd
from snowflake.connector.errors import ProgrammingError


class FakeSnowflakeDriver:
    """Records statements instead of sending them to Snowflake.

    failures: {statement substring: exception or list of exceptions}. A list is
    consumed one exception per matching call, so a statement can fail once and
    then succeed.
    """

    def __init__(self, failures=None, query_results=None, dataframes=None):
        self.failures = failures or {}
        self.query_results = query_results or {}
        self.dataframes = dataframes or {}
        self.statements = []
        self.closed = False

    def _maybe_fail(self, query):
        for fragment, error in self.failures.items():
            if fragment in query:
                if isinstance(error, list):
                    if error:
                        raise error.pop(0)
                    continue
                raise error

    def execute(self, query):
        self.statements.append(query)
        self._maybe_fail(query)
        return f'query-{len(self.statements)}'

    def get_query_results(self, query):
        self.statements.append(query)
        self._maybe_fail(query)
        for prefix, rows in self.query_results.items():
            if query.startswith(prefix):
                return rows
        return []

    def get_query_results_as_df(self, query):
        self.statements.append(query)
        self._maybe_fail(query)
        for fragment, df in self.dataframes.items():
            if fragment in query:
                return df
        return pd.DataFrame()

    def close(self):
        self.closed = True


def programming_error(msg, errno=None):
    return ProgrammingError(msg=msg, errno=errno, sqlstate='22000')


@pytest.fixture
def fake_driver():
    return FakeSnowflakeDriver()


@pytest.fixture
def warehouse_parameters():
    return [
        {'key': 'MAX_CONCURRENCY_LEVEL', 'value': '8', 'default': '8', 'level': ''},
        {'key': 'STATEMENT_QUEUED_TIMEOUT_IN_SECONDS', 'value': '600', 'default': '0', 'level': 'WAREHOUSE'},
        {'key': 'STATEMENT_TIMEOUT_IN_SECONDS', 'value': '1800', 'default': '172800', 'level': 'WAREHOUSE'},
    ]
