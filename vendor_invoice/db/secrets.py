"""AWS Secrets Manager lookup for the database connection descriptor."""
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import StartupError
from ..utils.logger import get_logger

logger = get_logger("db.secrets")


def fetch_secret_string(secret_arn: str, region_name: Optional[str] = None) -> str:
    """
    Fetch a plain-text secret value.

    Args:
        secret_arn: ARN (or name) of the secret
        region_name: AWS region; boto3's default resolution when None

    Returns:
        The secret's ``SecretString``

    Raises:
        StartupError: If the secret cannot be read
    """
    try:
        client = boto3.client("secretsmanager", region_name=region_name)
        response = client.get_secret_value(SecretId=secret_arn)
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Error retrieving secret: {e}")
        raise StartupError(
            "Unable to retrieve SQL connection string from Secrets Manager."
        ) from e

    secret = response.get("SecretString")
    if not secret:
        raise StartupError(f"Secret {secret_arn} has no SecretString value.")
    return secret
