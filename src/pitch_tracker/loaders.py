# src/pitch_tracker/loaders.py
"""
Upload reader for pitch data sheets.

Coaches upload either the device's CSV export or an Excel workbook; both come
back as plain row dictionaries with empty cells as None, ready for
normalize.normalize_many.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

import pandas as pd

from .models import PitchRecord, RawRecord
from .normalize import normalize_many

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv"}
EXCEL_SUFFIXES = {".xlsx", ".xls"}


class UnsupportedUploadError(ValueError):
    """Raised for files that are neither CSV nor Excel."""


def _frame_to_rows(df: pd.DataFrame) -> List[RawRecord]:
    # Device exports sometimes quote or pad their headers
    df.columns = [str(col).strip().strip('"') for col in df.columns]
    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


def read_upload(path: Union[str, Path]) -> List[RawRecord]:
    """
    Read an uploaded sheet into raw rows.

    Args:
        path: CSV or Excel file. Only the first worksheet of a workbook is read.

    Returns:
        One dict per non-empty row, keyed by the file's own headers.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in CSV_SUFFIXES:
        df = pd.read_csv(path, encoding="utf-8-sig", skip_blank_lines=True)
    elif suffix in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=0)
    else:
        raise UnsupportedUploadError(f"Unsupported upload type: {path.name}")

    rows = _frame_to_rows(df)
    logger.info("Read %d rows from %s", len(rows), path.name)
    return rows


def load_player_records(path: Union[str, Path], player_id: str) -> List[PitchRecord]:
    """Read an upload and normalize every row for ``player_id``."""
    return normalize_many(read_upload(path), player_id=player_id)


def raw_table(rows: Sequence[RawRecord]) -> Tuple[List[str], List[Dict[str, Any]]]:
    """
    Rectangular view of heterogeneous rows for the raw data table.

    Headers are the union of all keys in first-seen order; cells a row lacks
    are filled with "".
    """
    headers: List[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)

    table = []
    for row in rows:
        table.append({header: "" if row.get(header) is None else row[header] for header in headers})
    return headers, table
