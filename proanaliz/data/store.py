"""
File-backed record store.

One CSV file per table under `config.store_dir`. The store offers the
generic list / insert / update / delete primitives the dashboard needs; it
knows nothing about reports. Failures surface as StoreError.
"""
import json
import logging
import os
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import pandas as pd

from proanaliz.config import config, TABLE_FILES, TABLE_COLUMNS
from proanaliz.data.calendar_days import dump_working_days
from proanaliz.data.models import ExplicitDays, LegacyDefault

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the backing files cannot be read or written."""
    pass


def _load_file(filepath: Path) -> Optional[pd.DataFrame]:
    """Load a single table file (parquet or csv) as strings."""
    parquet_path = filepath.with_suffix(".parquet")
    csv_path = filepath.with_suffix(".csv")

    if csv_path.exists():
        return pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    elif parquet_path.exists():
        return pd.read_parquet(parquet_path).astype(str)
    return None


def _encode(value: Any) -> Any:
    if isinstance(value, (ExplicitDays, LegacyDefault)):
        return dump_working_days(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False)
    if value is None:
        return ""
    return value


class RecordStore:
    """CSV-per-table store with uuid row ids."""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else config.store_dir

    def _path(self, table: str) -> Path:
        if table not in TABLE_FILES:
            raise StoreError(f"Unknown table: {table}")
        return self.root / TABLE_FILES[table]

    def _read(self, table: str) -> pd.DataFrame:
        path = self._path(table)
        try:
            df = _load_file(path)
        except (OSError, ValueError) as e:
            raise StoreError(f"Could not read {table}: {e}") from e
        if df is None:
            return pd.DataFrame(columns=TABLE_COLUMNS[table])
        return df

    def _write(self, table: str, df: pd.DataFrame) -> None:
        path = self._path(table).with_suffix(".csv")
        tmp_path = path.with_suffix(".csv.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(tmp_path, index=False)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StoreError(f"Could not write {table}: {e}") from e

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def list(self, table: str) -> pd.DataFrame:
        """All rows of a table, raw (string) values."""
        return self._read(table)

    def insert(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Append a row; assigns an id when the record has none."""
        row = {col: _encode(record.get(col)) for col in TABLE_COLUMNS[table]}
        if "id" in row and not row["id"]:
            row["id"] = str(uuid.uuid4())

        df = self._read(table)
        df = pd.concat([df, pd.DataFrame([row]).astype(str)], ignore_index=True)
        self._write(table, df)
        logger.info("Inserted row into %s", table, extra={"table": table})
        return row

    def update(self, table: str, row_id: str, changes: Mapping[str, Any]) -> bool:
        """Update columns of one row; False when the id is unknown."""
        df = self._read(table)
        mask = df["id"] == row_id
        if not mask.any():
            return False
        for col, value in changes.items():
            if col == "id" or col not in TABLE_COLUMNS[table]:
                continue
            if col not in df.columns:
                df[col] = ""
            df.loc[mask, col] = str(_encode(value))
        self._write(table, df)
        return True

    def delete(self, table: str, row_id: str) -> bool:
        """Delete one row; False when the id is unknown."""
        df = self._read(table)
        mask = df["id"] == row_id
        if not mask.any():
            return False
        self._write(table, df[~mask])
        logger.info("Deleted row from %s", table, extra={"table": table})
        return True

    def delete_all(self, table: str) -> int:
        """Empty a table, returning the number of rows removed."""
        df = self._read(table)
        self._write(table, pd.DataFrame(columns=df.columns if len(df.columns) else TABLE_COLUMNS[table]))
        logger.warning("Cleared table %s (%d rows)", table, len(df), extra={"table": table})
        return len(df)

    # -------------------------------------------------------------------------
    # Settings (key/value)
    # -------------------------------------------------------------------------

    def get_setting(self, key: str, default: Optional[str] = None) -> Optional[str]:
        df = self._read("settings")
        match = df[df["key"] == key]
        if len(match) == 0:
            return default
        return str(match["value"].iloc[0])

    def set_setting(self, key: str, value: str) -> None:
        """Upsert a setting value."""
        df = self._read("settings")
        if (df["key"] == key).any():
            df.loc[df["key"] == key, "value"] = value
        else:
            df = pd.concat([df, pd.DataFrame([{"key": key, "value": value}])], ignore_index=True)
        self._write("settings", df)

    def exists(self, table: str) -> bool:
        path = self._path(table)
        return path.with_suffix(".csv").exists() or path.with_suffix(".parquet").exists()


def get_store() -> RecordStore:
    """Store rooted at the configured data directory."""
    return RecordStore(config.store_dir)
