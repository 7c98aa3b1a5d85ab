"""
Tests for the module-level shortcuts in dynamodb_toolkit.api.
"""

from unittest.mock import Mock, patch

import pytest

from dynamodb_toolkit import api
from dynamodb_toolkit.config import DynamoDBConfig
from dynamodb_toolkit.core import DynamoDBToolkit


@pytest.fixture(autouse=True)
def reset_default():
    api.reset_default_toolkit()
    yield
    api.reset_default_toolkit()


@pytest.fixture
def default_toolkit():
    toolkit = Mock(spec=DynamoDBToolkit)
    with patch('dynamodb_toolkit.api.create_toolkit', return_value=toolkit):
        yield toolkit


class TestDefaultToolkit:
    """Test the process-wide toolkit lifecycle."""

    def test_created_once_from_env(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-west-1")

        first = api.get_default_toolkit()
        second = api.get_default_toolkit()

        assert first is second
        assert first.config.region_name == "eu-west-1"

    def test_configure_replaces_toolkit(self):
        original = api.get_default_toolkit()
        config = DynamoDBConfig(region_name="us-west-2")

        configured = api.configure(config)

        assert configured is not original
        assert api.get_default_toolkit() is configured
        assert configured.config is config

    def test_reset(self):
        original = api.get_default_toolkit()

        api.reset_default_toolkit()

        assert api.get_default_toolkit() is not original


class TestShortcuts:
    """Test that shortcuts delegate to the default toolkit."""

    def test_list_tables(self, default_toolkit):
        assert api.list_tables() == default_toolkit.list_tables.return_value

    def test_describe_table(self, default_toolkit):
        api.describe_table('orders')

        default_toolkit.describe_table.assert_called_once_with('orders')

    def test_query_table(self, default_toolkit):
        api.query_table('orders', 'c1', '2024')

        default_toolkit.query_table.assert_called_once_with('orders', 'c1', '2024')

    def test_query_table_with_auto_pagination(self, default_toolkit):
        api.query_table_with_auto_pagination('orders', 'c1')

        default_toolkit.query_table_with_auto_pagination.assert_called_once_with('orders', 'c1', None)

    def test_scan_table(self, default_toolkit):
        filters = [{'attribute': 'n', 'operation': 'exists'}]

        api.scan_table('orders', filters)

        default_toolkit.scan_table.assert_called_once_with('orders', filters)

    def test_scan_table_with_auto_pagination(self, default_toolkit):
        api.scan_table_with_auto_pagination('orders')

        default_toolkit.scan_table_with_auto_pagination.assert_called_once_with('orders', None)

    def test_batch_write(self, default_toolkit):
        requests = [{'PutRequest': {'Item': {'id': '1'}}}]

        api.batch_write('orders', requests)

        default_toolkit.batch_write.assert_called_once_with('orders', requests)

    @pytest.mark.parametrize("name", [
        'get_default_toolkit', 'configure', 'reset_default_toolkit',
        'list_tables', 'describe_table', 'query_table', 'query_table_with_auto_pagination',
        'scan_table', 'scan_table_with_auto_pagination', 'batch_write',
    ])
    def test_public_functions_documented(self, name):
        assert getattr(api, name).__doc__
