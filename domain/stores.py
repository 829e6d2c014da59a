"""Row oriented stores the recipe repository can sit on.

A store knows about named tables of string cells and nothing about recipes.
Row indexes are zero based and exclude the header row.
"""

import re
from typing import Any, Protocol, Sequence, TypeAlias
from urllib.parse import quote

from databases import Database
import httpx

from domain.errors import PersistenceError


Cell: TypeAlias = str | int


SHEETS_API = "https://sheets.googleapis.com/v4/spreadsheets"

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class RowStore(Protocol):
    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    async def ensure_table(self, name: str, headers: Sequence[str]) -> None: ...

    async def append_row(self, name: str, row: Sequence[Cell]) -> None: ...

    async def read_rows(self, name: str) -> list[list[str]]: ...

    async def update_row(self, name: str, index: int, row: Sequence[Cell]) -> None: ...


class MemoryRowStore:
    def __init__(self) -> None:
        self.headers: dict[str, list[str]] = {}
        self.rows: dict[str, list[list[str]]] = {}

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    def _table(self, name: str) -> list[list[str]]:
        if name not in self.rows:
            raise PersistenceError(f"No table named {name}.")
        return self.rows[name]

    async def ensure_table(self, name: str, headers: Sequence[str]) -> None:
        if name not in self.rows:
            self.headers[name] = list(headers)
            self.rows[name] = []

    async def append_row(self, name: str, row: Sequence[Cell]) -> None:
        self._table(name).append([str(c) for c in row])

    async def read_rows(self, name: str) -> list[list[str]]:
        return [list(r) for r in self._table(name)]

    async def update_row(self, name: str, index: int, row: Sequence[Cell]) -> None:
        rows = self._table(name)
        if not 0 <= index < len(rows):
            raise PersistenceError(f"Row {index} out of range for {name}.")
        rows[index] = [str(c) for c in row]


def header_column(header: str) -> str:
    return re.sub(r"\W+", "_", header.strip().lower()).strip("_")


class SqlRowStore:
    """One SQL table per sheet, every column TEXT, ordered by an autoincrement key."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self.columns: dict[str, list[str]] = {}

    @classmethod
    def from_url(cls, url: str) -> "SqlRowStore":
        return cls(Database(url))

    async def connect(self) -> None:
        await self.db.connect()

    async def disconnect(self) -> None:
        await self.db.disconnect()

    def _columns(self, name: str) -> list[str]:
        if name not in self.columns:
            raise PersistenceError(f"Table {name} has not been ensured.")
        return self.columns[name]

    async def ensure_table(self, name: str, headers: Sequence[str]) -> None:
        if not IDENTIFIER.match(name):
            raise PersistenceError(f"Invalid table name {name!r}.")
        columns = [header_column(h) for h in headers]
        definition = ", ".join(f'"{c}" TEXT' for c in columns)
        query = (
            f'CREATE TABLE IF NOT EXISTS "{name}" '
            f"(row_id INTEGER PRIMARY KEY AUTOINCREMENT, {definition})"
        )
        try:
            await self.db.execute(query=query)  # pyright: ignore[reportUnknownMemberType]
        except Exception as e:
            raise PersistenceError(f"Could not create {name}.") from e
        self.columns[name] = columns

    async def append_row(self, name: str, row: Sequence[Cell]) -> None:
        columns = self._columns(name)
        names = ", ".join(f'"{c}"' for c in columns)
        params = ", ".join(f":c{i}" for i in range(len(columns)))
        values = {f"c{i}": str(cell) for i, cell in enumerate(row)}
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                f'INSERT INTO "{name}" ({names}) VALUES ({params})', values=values
            )
        except Exception as e:
            raise PersistenceError(f"Could not append to {name}.") from e

    async def read_rows(self, name: str) -> list[list[str]]:
        columns = self._columns(name)
        names = ", ".join(f'"{c}"' for c in columns)
        try:
            records = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                f'SELECT {names} FROM "{name}" ORDER BY row_id'
            )
        except Exception as e:
            raise PersistenceError(f"Could not read {name}.") from e
        return [["" if r[c] is None else str(r[c]) for c in columns] for r in records]

    async def update_row(self, name: str, index: int, row: Sequence[Cell]) -> None:
        columns = self._columns(name)
        assignments = ", ".join(f'"{c}" = :c{i}' for i, c in enumerate(columns))
        values: dict[str, str | int] = {f"c{i}": str(cell) for i, cell in enumerate(row)}
        values["offset"] = index
        query = (
            f'UPDATE "{name}" SET {assignments} WHERE row_id = '
            f'(SELECT row_id FROM "{name}" ORDER BY row_id LIMIT 1 OFFSET :offset)'
        )
        try:
            await self.db.execute(query, values=values)  # pyright: ignore[reportUnknownMemberType]
        except Exception as e:
            raise PersistenceError(f"Could not update {name} row {index}.") from e


class SheetsRowStore:
    """Google Sheets v4 values API, one worksheet per table."""

    def __init__(
        self,
        spreadsheet_id: str,
        token: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = f"{SHEETS_API}/{spreadsheet_id}"
        self._client = httpx.AsyncClient(
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        await self._client.aclose()

    def _values_url(self, a1_range: str, suffix: str = "") -> str:
        return f"{self.url}/values/{quote(a1_range, safe='')}{suffix}"

    async def _send(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp.json() if resp.content else {}
        except (httpx.HTTPError, ValueError) as e:
            raise PersistenceError(f"Sheets request failed: {method} {url}") from e

    async def ensure_table(self, name: str, headers: Sequence[str]) -> None:
        meta = await self._send("GET", self.url, params={"fields": "sheets.properties.title"})
        sheets = meta.get("sheets") or []
        titles = {s["properties"]["title"] for s in sheets}
        if name not in titles:
            await self._send(
                "POST",
                f"{self.url}:batchUpdate",
                json={"requests": [{"addSheet": {"properties": {"title": name}}}]},
            )
        first = await self._send("GET", self._values_url(f"'{name}'!1:1"))
        if not first.get("values"):
            await self._send(
                "PUT",
                self._values_url(f"'{name}'!A1"),
                params={"valueInputOption": "RAW"},
                json={"values": [list(headers)]},
            )

    async def append_row(self, name: str, row: Sequence[Cell]) -> None:
        await self._send(
            "POST",
            self._values_url(f"'{name}'!A1", ":append"),
            params={"valueInputOption": "RAW", "insertDataOption": "INSERT_ROWS"},
            json={"values": [list(row)]},
        )

    async def read_rows(self, name: str) -> list[list[str]]:
        data = await self._send("GET", self._values_url(f"'{name}'"))
        values = data.get("values") or []
        return [[str(c) for c in r] for r in values[1:]]

    async def update_row(self, name: str, index: int, row: Sequence[Cell]) -> None:
        await self._send(
            "PUT",
            self._values_url(f"'{name}'!A{index + 2}"),
            params={"valueInputOption": "RAW"},
            json={"values": [list(row)]},
        )
