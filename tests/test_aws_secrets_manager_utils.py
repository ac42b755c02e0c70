import json
from unittest import mock

import pytest
from botocore.exceptions import ClientError

from data_utils.aws_secrets_manager_utils import AWSSecretsManagerDriver


def test_get_secret_reads_env_scoped_json():
    with mock.patch('data_utils.aws_secrets_manager_utils.boto3.client') as client:
        client.return_value.get_secret_value.return_value = {'SecretString': json.dumps({'username': 'prefect'})}
        driver = AWSSecretsManagerDriver(env='staging', region_name='us-east-1')

        assert driver.get_secret('snowflake/prefect') == {'username': 'prefect'}

    client.assert_called_once_with('secretsmanager', region_name='us-east-1')
    client.return_value.get_secret_value.assert_called_once_with(SecretId='staging/snowflake/prefect')


def test_get_secret_propagates_client_errors():
    error = ClientError({'Error': {'Code': 'ResourceNotFoundException', 'Message': 'not found'}}, 'GetSecretValue')
    with mock.patch('data_utils.aws_secrets_manager_utils.boto3.client') as client:
        client.return_value.get_secret_value.side_effect = error
        with pytest.raises(ClientError):
            AWSSecretsManagerDriver(env='staging').get_secret('snowflake/prefect')
