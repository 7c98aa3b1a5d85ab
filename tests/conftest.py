"""
Test configuration and fixtures for the DynamoDB toolkit.

Provides an isolated AWS environment, a toolkit wired to a Mock client for
unit tests, and a moto-backed toolkit with an ``orders`` table for
integration tests.
"""

from unittest.mock import Mock

import pytest
from moto import mock_aws

from dynamodb_toolkit import DynamoDBConfig, DynamoDBToolkit

AWS_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_PROFILE",
    "AWS_DEFAULT_PROFILE",
    "AWS_REGION",
    "DYNAMODB_CREDENTIALS_FILE",
    "DYNAMODB_ENDPOINT_URL",
    "DYNAMODB_DEBUG_LOGGING",
)


@pytest.fixture(autouse=True)
def isolated_aws_env(monkeypatch, tmp_path):
    """Keep the developer's real AWS setup out of every test."""
    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "no-credentials"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "no-config"))


@pytest.fixture
def dynamodb_config():
    """DynamoDB configuration with static test credentials."""
    return DynamoDBConfig(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1"
    )


@pytest.fixture
def toolkit(dynamodb_config):
    return DynamoDBToolkit(dynamodb_config)


@pytest.fixture
def mock_client(toolkit):
    """Mock document client behind ``toolkit``; no boto3 session is created."""
    resource = Mock()
    toolkit._dynamodb = resource
    return resource.meta.client


@pytest.fixture
def orders_key_schema_response():
    """DescribeTable response for a (customer_id, order_date) table."""
    return {
        'Table': {
            'TableName': 'orders',
            'KeySchema': [
                {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
                {'AttributeName': 'order_date', 'KeyType': 'RANGE'},
            ],
        }
    }


@pytest.fixture
def moto_toolkit(dynamodb_config):
    """Toolkit talking to moto's in-memory DynamoDB."""
    with mock_aws():
        yield DynamoDBToolkit(dynamodb_config)


@pytest.fixture
def orders_table(moto_toolkit):
    """Create the ``orders`` table (HASH customer_id, RANGE order_date)."""
    return moto_toolkit.dynamodb.create_table(
        TableName='orders',
        KeySchema=[
            {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
            {'AttributeName': 'order_date', 'KeyType': 'RANGE'},
        ],
        AttributeDefinitions=[
            {'AttributeName': 'customer_id', 'AttributeType': 'S'},
            {'AttributeName': 'order_date', 'AttributeType': 'S'},
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def customers_table(moto_toolkit):
    """Create the ``customers`` table (HASH only)."""
    return moto_toolkit.dynamodb.create_table(
        TableName='customers',
        KeySchema=[{'AttributeName': 'customer_id', 'KeyType': 'HASH'}],
        AttributeDefinitions=[{'AttributeName': 'customer_id', 'AttributeType': 'S'}],
        BillingMode='PAY_PER_REQUEST'
    )
