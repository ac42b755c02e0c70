from data_utils.logger import init_logger
from data_utils.aws_secrets_manager_utils import AWSSecretsManagerDriver
from data_utils.snowflake_utils import SnowflakeDriver

from prefect_jobs.warehouse_admin.config import (
    ENV, SNOWFLAKE_ACCOUNT, SNOWFLAKE_USER, SNOWFLAKE_PASSWORD, SNOWFLAKE_SECRET_NAME, DATABASE
)

logger = init_logger('warehouse-admin')


def _get_snowflake_credentials():
    if ENV == 'local':
        if not SNOWFLAKE_USER or not SNOWFLAKE_PASSWORD:
            raise ValueError('SNOWFLAKE_USER and SNOWFLAKE_PASSWORD are required when ENV=local')
        return {'username': SNOWFLAKE_USER, 'password': SNOWFLAKE_PASSWORD, 'account': SNOWFLAKE_ACCOUNT}

    secrets_manager_driver = AWSSecretsManagerDriver(env=ENV)
    snowflake_secrets = secrets_manager_driver.get_secret(SNOWFLAKE_SECRET_NAME)
    return {
        'username': snowflake_secrets['username'],
        'password': snowflake_secrets['password'],
        'account': snowflake_secrets.get('account', SNOWFLAKE_ACCOUNT),
    }


def init_snowflake_driver() -> SnowflakeDriver:
    logger.info(f'initializing Snowflake driver on ENV: {ENV}')
    credentials = _get_snowflake_credentials()
    return SnowflakeDriver(
        username=credentials['username'],
        password=credentials['password'],
        account=credentials['account'],
        database=DATABASE,
    )
