from unittest import mock

import pytest

from prefect_jobs.warehouse_admin import drivers


def test_local_credentials_from_environment():
    with mock.patch.multiple(drivers, ENV='local', SNOWFLAKE_USER='walker', SNOWFLAKE_PASSWORD='pw',
                             SNOWFLAKE_ACCOUNT='xy12345'):
        snowflake_driver = drivers.init_snowflake_driver()
    assert (snowflake_driver.username, snowflake_driver.password, snowflake_driver.account) == ('walker', 'pw', 'xy12345')
    assert snowflake_driver.database == drivers.DATABASE


def test_local_credentials_are_required():
    with mock.patch.multiple(drivers, ENV='local', SNOWFLAKE_USER=None, SNOWFLAKE_PASSWORD=None):
        with pytest.raises(ValueError):
            drivers.init_snowflake_driver()


def test_credentials_from_secrets_manager():
    with mock.patch.object(drivers, 'ENV', 'production'), \
            mock.patch.object(drivers, 'AWSSecretsManagerDriver') as secrets_manager:
        secrets_manager.return_value.get_secret.return_value = {
            'username': 'prefect', 'password': 'secret', 'account': 'prod-account'
        }
        snowflake_driver = drivers.init_snowflake_driver()

    secrets_manager.assert_called_once_with(env='production')
    secrets_manager.return_value.get_secret.assert_called_once_with('snowflake/prefect')
    assert (snowflake_driver.username, snowflake_driver.account) == ('prefect', 'prod-account')
