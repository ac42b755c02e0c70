import os
import json
import logging
from typing import Dict

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class AWSSecretsManagerDriver:
    """Reads JSON secrets stored under '{env}/{secret_name}'."""

    def __init__(self, env: str, region_name: str = None):
        self.env = env
        self.region_name = region_name or os.environ.get("AWS_REGION", "us-east-1")
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("secretsmanager", region_name=self.region_name)
        return self._client

    def get_secret(self, secret_name: str) -> Dict:
        secret_id = f"{self.env}/{secret_name}"
        logger.info(f"fetching secret: {secret_id}")
        try:
            response = self.client.get_secret_value(SecretId=secret_id)
        except ClientError as e:
            logger.error(f"failed to fetch secret {secret_id}: {e}")
            raise
        return json.loads(response["SecretString"])
