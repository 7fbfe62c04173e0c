# /app/services/record_helpers/local_csv_repository.py

"""
Reads record collections from CSV snapshots, one file per collection.

Used for local development when the remote service is not reachable. Each
file has the envelope columns (`record_id`, `createdat`, `updatedat`) plus
one column per field, named as on the wire (e.g. `startdatum`, `bezahlt`).
"""

import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from ...core import config
from .base_repository import BaseRecordRepository, RecordSourceError

logger = logging.getLogger(__name__)

ENVELOPE_COLUMNS = ["record_id", "createdat", "updatedat"]

# CSV has no boolean type; these columns hold the text "true" or "false".
BOOLEAN_COLUMNS = {"bezahlt"}


class LocalCsvRepository(BaseRecordRepository):
    def __init__(self, data_dir: Optional[str] = None):
        self.data_dir = data_dir or config.LOCAL_DATA_DIR

    def file_path(self, collection: str) -> str:
        return os.path.join(self.data_dir, f"{collection}.csv")

    def _load_raw(self, collection: str) -> List[Dict[str, Any]]:
        path = self.file_path(collection)
        if not os.path.exists(path):
            logger.warning(f"No snapshot for '{collection}' at {path}, treating it as empty.")
            return []
        try:
            # Read everything as text; pydantic converts the values per field.
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise RecordSourceError(collection, str(e)) from e
        except pd.errors.EmptyDataError:
            return []

        missing = [c for c in ("record_id", "createdat") if c not in df.columns]
        if missing:
            raise RecordSourceError(collection, f"missing columns {missing}")

        field_columns = [c for c in df.columns if c not in ENVELOPE_COLUMNS]
        return [_row_to_record(row, field_columns) for row in df.to_dict(orient="records")]


def _to_wire_value(column: str, value: str) -> Any:
    if column in BOOLEAN_COLUMNS:
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return value


def _row_to_record(row: Dict[str, str], field_columns: List[str]) -> Dict[str, Any]:
    # Empty cells stand for absent values, exactly like a missing key on the wire.
    return {
        "record_id": row["record_id"],
        "createdat": row["createdat"],
        "updatedat": row.get("updatedat") or None,
        "fields": {c: _to_wire_value(c, row[c]) for c in field_columns if row[c] != ""},
    }
