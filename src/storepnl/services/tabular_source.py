"""HttpTabularSource: downloads a hosted spreadsheet/CSV and decodes its first sheet."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from io import BytesIO
from typing import Any, Callable

import pandas as pd
import requests

from storepnl.core.exceptions import FetchError
from storepnl.models.records import TabularData

logger = logging.getLogger(__name__)


def is_csv_source(url: str, content_type: str) -> bool:
    """Published Google Sheets CSV links carry ``output=csv``; others declare text/csv."""
    return "output=csv" in url or "text/csv" in content_type.lower()


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (datetime, date, pd.Timestamp)):
        return value.strftime("%b-%y")
    if isinstance(value, float) and value != value:
        return ""
    if hasattr(value, "item"):
        return value.item()
    return value


def frame_to_table(frame: pd.DataFrame) -> TabularData:
    """Ordered header list plus row dicts; empty cells become ``""``."""
    columns = [str(c) for c in frame.columns]
    frame = frame.astype(object).where(pd.notna(frame), "")
    rows = [
        {col: _cell(value) for col, value in zip(columns, values)}
        for values in frame.itertuples(index=False, name=None)
    ]
    return TabularData(columns=columns, rows=rows)


class HttpTabularSource:
    """ITabularSource over HTTP(S) using requests; the blocking call runs in a worker thread.

    Each fetch opens its own ``requests.Session`` from ``session_factory``;
    concurrent fetches run on separate threads and never share one.
    """

    def __init__(
        self,
        timeout: int = 30,
        csv_encoding: str = "utf-8",
        user_agent: str = "storepnl/0.1",
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._timeout = timeout
        self._csv_encoding = csv_encoding
        self._headers = {"User-Agent": user_agent}
        self._session_factory = session_factory

    async def fetch(self, url: str) -> TabularData:
        return await asyncio.to_thread(self.fetch_sync, url)

    def fetch_sync(self, url: str) -> TabularData:
        logger.info("Fetching tabular source %s", url)
        http = self._session_factory()
        try:
            resp = http.get(url, timeout=self._timeout, headers=self._headers)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        finally:
            http.close()

        content_type = resp.headers.get("content-type", "")
        try:
            if is_csv_source(url, content_type):
                frame = pd.read_csv(
                    BytesIO(resp.content),
                    encoding=self._csv_encoding,
                    dtype=str,
                    keep_default_na=False,
                )
            else:
                frame = pd.read_excel(
                    BytesIO(resp.content), sheet_name=0, engine="openpyxl", dtype=object,
                )
        except Exception as exc:
            raise FetchError(url, f"could not decode spreadsheet: {exc}") from exc

        table = frame_to_table(frame)
        logger.info("Decoded %d row(s), %d column(s) from %s", len(table.rows), len(table.columns), url)
        return table
