"""DynamoDB backends implementing ILinkRegistry and IUserDirectory."""

from __future__ import annotations

import uuid
from typing import Any

import boto3
from botocore.exceptions import ClientError

from storepnl.core.exceptions import LinkNotFoundError, StorePnLError
from storepnl.models.links import ExcelLink, UserAccount

LINKS_TABLE = "storepnl-excel-links"
USERS_TABLE = "storepnl-users"


class _DynamoDBTable:
    """Shared table access: suffix handling, PK/SK get, paginated scan."""

    def __init__(self, base: str, table_suffix: str = "", region: str = "eu-central-1",
                 endpoint_url: str | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._table = self._ddb.Table(f"{base}{table_suffix}")

    def _get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table.get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise StorePnLError(f"DynamoDB get failed for {pk!r}: {exc}") from exc
        return resp.get("Item")

    def _scan(self) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        kwargs: dict[str, Any] = {}
        try:
            while True:
                resp = self._table.scan(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    return items
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StorePnLError(f"DynamoDB scan failed: {exc}") from exc


class DynamoDBLinkRegistry(_DynamoDBTable):
    """Production ILinkRegistry: one item per link, ``PK=LINK#{id}``, ``SK=LINK``."""

    def __init__(self, table_suffix: str = "", region: str = "eu-central-1",
                 endpoint_url: str | None = None) -> None:
        super().__init__(LINKS_TABLE, table_suffix, region, endpoint_url)

    @staticmethod
    def _to_link(item: dict[str, Any]) -> ExcelLink:
        return ExcelLink(id=item["id"], name=item.get("name", ""), url=item.get("url", ""))

    def list_links(self) -> list[ExcelLink]:
        links = [self._to_link(i) for i in self._scan() if i.get("SK") == "LINK"]
        return sorted(links, key=lambda link: link.name.lower())

    def get_link(self, link_id: str) -> ExcelLink:
        item = self._get_item(f"LINK#{link_id}", "LINK")
        if item is None:
            raise LinkNotFoundError(f"No data-source link with id={link_id!r}")
        return self._to_link(item)

    def add_link(self, name: str, url: str) -> ExcelLink:
        link = ExcelLink(id=uuid.uuid4().hex, name=name, url=url)
        self._put(link)
        return link

    def update_link(self, link: ExcelLink) -> ExcelLink:
        self.get_link(link.id)
        self._put(link)
        return link

    def delete_link(self, link_id: str) -> None:
        try:
            self._table.delete_item(Key={"PK": f"LINK#{link_id}", "SK": "LINK"})
        except ClientError as exc:
            raise StorePnLError(f"DynamoDB delete failed for link {link_id!r}: {exc}") from exc

    def _put(self, link: ExcelLink) -> None:
        try:
            self._table.put_item(Item={"PK": f"LINK#{link.id}", "SK": "LINK", **link.model_dump()})
        except ClientError as exc:
            raise StorePnLError(f"DynamoDB put failed for link {link.id!r}: {exc}") from exc


class DynamoDBUserDirectory(_DynamoDBTable):
    """Production IUserDirectory: ``PK=USER#{email}``, ``SK=PROFILE``."""

    def __init__(self, table_suffix: str = "", region: str = "eu-central-1",
                 endpoint_url: str | None = None) -> None:
        super().__init__(USERS_TABLE, table_suffix, region, endpoint_url)

    def find_by_email(self, email: str) -> UserAccount | None:
        item = self._get_item(f"USER#{email.strip().lower()}", "PROFILE")
        if item is None:
            return None
        return UserAccount(
            id=item.get("id", ""),
            name=item.get("name", ""),
            email=item.get("email", email),
            role=item.get("role", "client"),
            stores=list(item.get("stores", [])),
            password=item.get("password", ""),
        )
