"""DataLayer – DuckDB wrapper that turns files and queries into records.

Charts take a list of plain dicts. DuckDB reads CSV, Parquet and JSON
with type inference, so DATE columns arrive as ``datetime.date`` and
numeric columns as numbers. That is what the chart functions expect.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import duckdb

from asciiviz.errors import ConfigurationError

_READERS = {
    ".csv": "read_csv_auto",
    ".tsv": "read_csv_auto",
    ".parquet": "read_parquet",
    ".json": "read_json_auto",
    ".ndjson": "read_json_auto",
}


class DataLayer:
    """Read-only access to data files and DuckDB databases.

    Parameters
    ----------
    db_path : str | Path | None
        DuckDB file to query.  ``None`` opens an in-memory database,
        which is enough for reading standalone files.
    """

    def __init__(self, db_path: str | Path | None = None):
        if db_path is not None and not Path(db_path).exists():
            raise ConfigurationError(f"Database not found: {db_path}")
        if db_path is None:
            self._conn = duckdb.connect(":memory:")
        else:
            self._conn = duckdb.connect(str(db_path), read_only=True)

    def read_file(self, path: str | Path) -> list[dict[str, Any]]:
        """Load every row of a CSV, Parquet or JSON file."""
        path = Path(path)
        reader = _READERS.get(path.suffix.lower())
        if reader is None:
            raise ConfigurationError(
                f"Unsupported data file {path.name!r}; expected one of {', '.join(_READERS)}."
            )
        if not path.exists():
            raise ConfigurationError(f"Data file not found: {path}")
        literal = str(path).replace("'", "''")
        return self.query(f"SELECT * FROM {reader}('{literal}')")

    def query(self, sql: str, params: list[Any] | None = None) -> list[dict[str, Any]]:
        """Run *sql* and return its rows as dicts keyed by column name."""
        try:
            result = self._conn.execute(sql, params or [])
        except duckdb.Error as e:
            raise ConfigurationError(f"Query failed: {e}") from e
        if result.description is None:
            return []
        columns = [desc[0] for desc in result.description]
        return [dict(zip(columns, row)) for row in result.fetchall()]

    def close(self):
        """Close the underlying DuckDB connection."""
        self._conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
