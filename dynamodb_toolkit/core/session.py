"""
AWS session setup for the DynamoDB toolkit.

Credentials are resolved once per toolkit, in this order:

1. A JSON credentials file named by ``DYNAMODB_CREDENTIALS_FILE``
   (``accessKeyId``, ``secretAccessKey`` and optionally ``sessionToken``
   and ``region``)
2. ``AWS_ACCESS_KEY_ID`` / ``AWS_SECRET_ACCESS_KEY``
3. A named profile (``AWS_PROFILE``) or the shared credentials file
   (``~/.aws/credentials`` unless ``AWS_SHARED_CREDENTIALS_FILE`` says otherwise)

If none of these is available a CredentialsError is raised before any
request is made.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import boto3
import botocore.session

from ..config import DynamoDBConfig
from ..exceptions import CredentialsError

logger = logging.getLogger(__name__)

SOURCE_CREDENTIALS_FILE = "credentials_file"
SOURCE_ENVIRONMENT = "environment"
SOURCE_SHARED_CREDENTIALS = "shared_credentials"


def load_credentials_file(path: str) -> Dict[str, Any]:
    """Read and check a JSON credentials file.

    Raises:
        CredentialsError: File unreadable, not JSON, or missing keys
    """
    file_path = Path(path).expanduser().resolve()
    try:
        with file_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise CredentialsError(f"Unable to read credentials file {file_path}: {e}", str(file_path), e) from e
    except ValueError as e:
        raise CredentialsError(f"Credentials file {file_path} is not valid JSON: {e}", str(file_path), e) from e

    if not isinstance(data, dict) or not data.get("accessKeyId") or not data.get("secretAccessKey"):
        raise CredentialsError(
            f"Credentials file {file_path} must define accessKeyId and secretAccessKey", str(file_path)
        )
    return data


def resolve_credentials_source(config: DynamoDBConfig) -> str:
    """Return which credentials source ``create_session`` will use.

    Raises:
        CredentialsError: No source is available
    """
    if config.credentials_file:
        return SOURCE_CREDENTIALS_FILE
    if config.has_static_credentials:
        return SOURCE_ENVIRONMENT
    if config.profile_name or Path(config.shared_credentials_file).expanduser().exists():
        return SOURCE_SHARED_CREDENTIALS
    raise CredentialsError("Unable to set AWS credentials.")


def create_session(config: DynamoDBConfig) -> boto3.Session:
    """Create the boto3 session used for every DynamoDB call.

    Args:
        config: DynamoDB configuration

    Returns:
        boto3 Session bound to the resolved credentials and region
    """
    logger.info(f"Initializing AWS DynamoDB with region: {config.region_name}.")
    source = resolve_credentials_source(config)

    if source == SOURCE_CREDENTIALS_FILE:
        logger.info("Using AWS credentials from JSON credentials file.")
        data = load_credentials_file(config.credentials_file)
        return boto3.Session(
            aws_access_key_id=data["accessKeyId"],
            aws_secret_access_key=data["secretAccessKey"],
            aws_session_token=data.get("sessionToken"),
            region_name=data.get("region") or config.region_name
        )

    if source == SOURCE_ENVIRONMENT:
        logger.info("Using AWS credentials AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY.")
        return boto3.Session(
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            aws_session_token=config.aws_session_token,
            region_name=config.region_name
        )

    logger.info("Using AWS credentials from shared credentials file.")
    core_session = botocore.session.get_session()
    core_session.set_config_variable(
        "credentials_file", str(Path(config.shared_credentials_file).expanduser())
    )
    return boto3.Session(
        botocore_session=core_session,
        profile_name=config.profile_name,
        region_name=config.region_name
    )
