# src/pitch_tracker/filters.py
"""
Date-range and player selection applied before aggregation.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from .models import PitchRecord

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, None]


def parse_record_date(value: Any) -> Optional[date]:
    """Parse "2024/05/03", "2024-05-03" and friends; None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def filter_by_date_range(records: Sequence[PitchRecord], start: DateLike = None, end: DateLike = None) -> List[PitchRecord]:
    """
    Keep records dated within [start, end], both ends inclusive.

    Without both bounds the whole period is kept, undated records included.
    """
    start_date = parse_record_date(start)
    end_date = parse_record_date(end)
    if start_date is None or end_date is None:
        return list(records)

    kept = []
    for record in records:
        record_date = parse_record_date(record.date)
        if record_date is not None and start_date <= record_date <= end_date:
            kept.append(record)
    return kept


def filter_players(records: Sequence[PitchRecord], player_ids: Iterable[str]) -> List[PitchRecord]:
    wanted = set(player_ids)
    return [record for record in records if record.player_id in wanted]


def group_by_player(records: Iterable[PitchRecord]) -> Dict[str, List[PitchRecord]]:
    grouped: Dict[str, List[PitchRecord]] = {}
    for record in records:
        grouped.setdefault(record.player_id, []).append(record)
    return grouped


def sort_by_date(records: Sequence[PitchRecord]) -> List[PitchRecord]:
    """Oldest first; undated records keep their order at the end."""
    dated = []
    undated = []
    for record in records:
        record_date = parse_record_date(record.date)
        if record_date is None:
            undated.append(record)
        else:
            dated.append((record_date, record))
    dated.sort(key=lambda item: item[0])
    return [record for _, record in dated] + undated


def select_comparison_players(player_ids: Sequence[str], limit: int = 5) -> List[str]:
    selected: List[str] = []
    for player_id in player_ids:
        if player_id not in selected:
            selected.append(player_id)
    if len(selected) > limit:
        logger.debug("Comparison limited to %d players, dropping %s", limit, selected[limit:])
    return selected[:limit]
