"""Seed DynamoDB tables with sample data-source links and dashboard users.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "storepnl-excel-links"},
    {"name": "storepnl-users"},
]

SAMPLE_LINKS: list[dict[str, str]] = [
    {
        "id": "actual-2024",
        "name": "Actual 2024",
        "url": "https://docs.google.com/spreadsheets/d/e/actual-2024/pub?output=csv",
    },
    {
        "id": "budget-2024",
        "name": "Budget 2024",
        "url": "https://docs.google.com/spreadsheets/d/e/budget-2024/pub?output=csv",
    },
]

SAMPLE_USERS: list[dict[str, Any]] = [
    {
        "id": "u-admin",
        "name": "Head Office",
        "email": "admin@example.com",
        "role": "admin",
        "stores": [],
        "password": "change-me",
    },
    {
        "id": "u-kifisia",
        "name": "Kifisia Franchisee",
        "email": "kifisia@example.com",
        "role": "client",
        "stores": ["Kifisia"],
        "password": "change-me",
    },
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create the link and user tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_sample_data(ddb: Any, suffix: str = "") -> None:
    """Write the sample links and users."""
    tbl = ddb.Table(f"storepnl-excel-links{suffix}")
    with tbl.batch_writer() as batch:
        for link in SAMPLE_LINKS:
            batch.put_item(Item={"PK": f"LINK#{link['id']}", "SK": "LINK", **link})
    print(f"  Seeded {len(SAMPLE_LINKS)} data-source links")

    tbl = ddb.Table(f"storepnl-users{suffix}")
    with tbl.batch_writer() as batch:
        for user in SAMPLE_USERS:
            batch.put_item(Item={"PK": f"USER#{user['email']}", "SK": "PROFILE", **user})
    print(f"  Seeded {len(SAMPLE_USERS)} users")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for the store P&L dashboard")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="eu-central-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding data...")
    seed_sample_data(ddb, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
