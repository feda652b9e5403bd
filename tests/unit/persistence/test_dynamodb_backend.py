"""Unit tests for the DynamoDB link registry and user directory using moto."""

from __future__ import annotations

import boto3
import pytest
from moto import mock_aws

from storepnl.core.exceptions import LinkNotFoundError
from storepnl.models.links import ExcelLink
from storepnl.models.session import Role
from storepnl.persistence.dynamodb_backend import DynamoDBLinkRegistry, DynamoDBUserDirectory

TABLE_SUFFIX = "-test"
REGION = "eu-central-1"

# ---------- helpers ----------

def _create_table(client, name: str, pk: str = "PK", sk: str = "SK"):
    """Create a DynamoDB table with PK/SK key schema."""
    client.create_table(
        TableName=name,
        KeySchema=[
            {"AttributeName": pk, "KeyType": "HASH"},
            {"AttributeName": sk, "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": pk, "AttributeType": "S"},
            {"AttributeName": sk, "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )


# ---------- fixtures ----------

@pytest.fixture
def aws():
    with mock_aws():
        ddb = boto3.resource("dynamodb", region_name=REGION)
        client = boto3.client("dynamodb", region_name=REGION)
        for name in ["storepnl-excel-links", "storepnl-users"]:
            _create_table(client, f"{name}{TABLE_SUFFIX}")
        yield ddb


@pytest.fixture
def links(aws):
    return DynamoDBLinkRegistry(table_suffix=TABLE_SUFFIX, region=REGION)


@pytest.fixture
def users(aws):
    return DynamoDBUserDirectory(table_suffix=TABLE_SUFFIX, region=REGION)


# ---------- link registry ----------

class TestLinkRegistry:
    def test_add_then_get(self, links):
        link = links.add_link("Actual 2024", "https://example.com/a.csv")
        assert link.id
        assert links.get_link(link.id) == link

    def test_list_sorted_by_name(self, links):
        links.add_link("budget", "https://example.com/b")
        links.add_link("Actual", "https://example.com/a")
        assert [link.name for link in links.list_links()] == ["Actual", "budget"]

    def test_list_empty(self, links):
        assert links.list_links() == []

    def test_get_missing_raises(self, links):
        with pytest.raises(LinkNotFoundError):
            links.get_link("nope")

    def test_update(self, links):
        link = links.add_link("Actual", "https://example.com/old")
        links.update_link(ExcelLink(id=link.id, name="Actual", url="https://example.com/new"))
        assert links.get_link(link.id).url == "https://example.com/new"

    def test_update_missing_raises(self, links):
        with pytest.raises(LinkNotFoundError):
            links.update_link(ExcelLink(id="ghost", name="x", url="y"))

    def test_delete(self, links):
        link = links.add_link("Actual", "https://example.com/a")
        links.delete_link(link.id)
        with pytest.raises(LinkNotFoundError):
            links.get_link(link.id)


# ---------- user directory ----------

class TestUserDirectory:
    def test_find_by_email(self, users, aws):
        aws.Table(f"storepnl-users{TABLE_SUFFIX}").put_item(Item={
            "PK": "USER#owner@example.com", "SK": "PROFILE",
            "id": "u1", "email": "owner@example.com", "role": "client",
            "stores": ["Kifisia"], "password": "pw",
        })
        user = users.find_by_email(" Owner@Example.com ")
        assert user.id == "u1"
        assert user.role == Role.CLIENT
        assert user.stores == ["Kifisia"]

    def test_unknown_email(self, users):
        assert users.find_by_email("ghost@example.com") is None
