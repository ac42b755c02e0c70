"""Sample analytic queries run against the walkthrough database."""

from datetime import datetime
from typing import Dict, Optional
from prefect import task, get_run_logger
from prefect.cache_policies import NONE

from data_utils.snowflake_utils import SnowflakeDriver
from prefect_jobs.warehouse_admin.utils import load_query, export_results_to_csv


@task(cache_policy=NONE)
def run_sample_query_task(
    snowflake_driver: SnowflakeDriver, query_name: str, label: str = None, export_dir: Optional[str] = None
) -> Dict:
    logger = get_run_logger()
    label = label or query_name
    query = load_query(query_name)
    logger.info(f'executing query {label} in Snowflake:\n{"#"*10}\n{query}\n{"#"*10}')

    start_time = datetime.utcnow()
    df = snowflake_driver.get_query_results_as_df(query)
    query_time_taken = (datetime.utcnow() - start_time).total_seconds()

    num_rows = 0 if df is None else len(df)
    logger.info(f'query {label} returned {num_rows} rows in {query_time_taken:.2f}s')
    if num_rows:
        logger.info(f'\n{df.head(10).to_string(index=False)}')

    output_csv_file_path = export_results_to_csv(export_dir, df, label) if export_dir else None
    return {
        'query_name': query_name,
        'label': label,
        'number_of_rows': num_rows,
        'query_time_taken': query_time_taken,
        'output_csv_file_path': output_csv_file_path,
    }
