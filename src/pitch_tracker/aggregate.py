# src/pitch_tracker/aggregate.py
"""
Per-player summary statistics over an already filtered record set.

Nothing here filters by player or date; callers hand in the slice they want
summarized (see filters.py). Every statistic is defined for empty input and
comes back as 0 rather than NaN.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .models import AggregateStats, PitchRecord, PlayerSummary, RecentRecord


def _values(records: Sequence[PitchRecord], field: str) -> List[float]:
    return [float(getattr(record, field)) for record in records]


def average(records: Sequence[PitchRecord], field: str) -> float:
    values = _values(records, field)
    if not values:
        return 0.0
    return sum(values) / len(values)


def maximum(records: Sequence[PitchRecord], field: str) -> float:
    values = _values(records, field)
    if not values:
        return 0.0
    return max(values)


def strike_rate(records: Sequence[PitchRecord]) -> float:
    if not records:
        return 0.0
    strikes = sum(1 for record in records if record.strike)
    return strikes / len(records) * 100


def _shared_player_id(records: Sequence[PitchRecord]) -> Optional[str]:
    ids = {record.player_id for record in records}
    return ids.pop() if len(ids) == 1 else None


def aggregate(records: Sequence[PitchRecord], player_id: Optional[str] = None) -> AggregateStats:
    """
    Summarize a record slice.

    Args:
        records: Pitches to summarize, typically one player over a date range.
        player_id: Id stamped on the result. Defaults to the id every record
            shares, or None for a mixed slice.

    Returns:
        AggregateStats; all zeros when ``records`` is empty.
    """
    if player_id is None:
        player_id = _shared_player_id(records)
    return AggregateStats(
        player_id=player_id,
        count=len(records),
        avg_speed=average(records, "speed"),
        max_speed=maximum(records, "speed"),
        avg_spin=average(records, "spin"),
        max_spin=maximum(records, "spin"),
        avg_true_spin=average(records, "true_spin"),
        avg_spin_efficiency=average(records, "spin_efficiency"),
        strike_rate=strike_rate(records),
    )


def summarize_player(records: Sequence[PitchRecord]) -> PlayerSummary:
    """Profile-card numbers; speed and spin only count actual measurements."""
    speeds = [record.speed for record in records if record.speed > 0]
    spins = [float(record.spin) for record in records if record.spin > 0]
    dates = [record.date for record in records if record.date]

    return PlayerSummary(
        max_speed=max(speeds) if speeds else 0.0,
        avg_speed=sum(speeds) / len(speeds) if speeds else 0.0,
        max_spin=max(spins) if spins else 0.0,
        avg_spin=sum(spins) / len(spins) if spins else 0.0,
        recent_speed=speeds[-1] if speeds else None,
        total_records=len(records),
        last_record_date=dates[-1] if dates else "-",
    )


def recent_records(records: Sequence[PitchRecord], n: int = 5) -> List[RecentRecord]:
    """Last ``n`` records in upload order, newest first."""
    if n <= 0:
        return []
    tail = list(records)[-n:]
    return [
        RecentRecord(date=record.date or "-", speed=record.speed, spin=float(record.spin))
        for record in reversed(tail)
    ]
