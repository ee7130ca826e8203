# src/pitch_tracker/rankings.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence

from .aggregate import aggregate
from .models import AggregateStats, PitchRecord, PlayerRank, ProfileRanking, RankingEntry

RECORD_METRICS = (
    "speed",
    "spin",
    "true_spin",
    "spin_efficiency",
    "vertical_movement",
    "horizontal_movement",
    "release_point",
)

AGGREGATE_METRICS = (
    "count",
    "avg_speed",
    "max_speed",
    "avg_spin",
    "max_spin",
    "avg_true_spin",
    "avg_spin_efficiency",
    "strike_rate",
)


def _check_metric(metric: str, allowed: Sequence[str]) -> None:
    if metric not in allowed:
        raise ValueError(f"Unknown metric {metric!r}; expected one of {', '.join(allowed)}")


def top_n(records: Sequence[PitchRecord], metric: str, n: int = 5) -> List[RankingEntry]:
    """
    Leaderboard for one per-pitch metric.

    A 0 reading means the device recorded nothing, so those pitches are left
    out instead of competing as the lowest score. Equal values keep their
    input order. Returns at most ``n`` entries and never pads.
    """
    _check_metric(metric, RECORD_METRICS)
    if n <= 0:
        return []
    qualifying = [record for record in records if getattr(record, metric) != 0]
    # sorted() stays stable with reverse=True
    ranked = sorted(qualifying, key=lambda record: getattr(record, metric), reverse=True)
    return [
        RankingEntry(player_id=record.player_id, value=float(getattr(record, metric)), date=record.date)
        for record in ranked[:n]
    ]


def leaderboards(
    records: Sequence[PitchRecord], metrics: Iterable[str] = ("speed", "spin"), n: int = 5
) -> Dict[str, List[RankingEntry]]:
    return {metric: top_n(records, metric, n) for metric in metrics}


def percentile_rank(cohort: Sequence[AggregateStats], player_id: str, metric: str) -> PlayerRank:
    """
    Positional rank of ``player_id`` within ``cohort`` by ``metric``.

    Ranks are 1-based after a stable descending sort, so tied players get
    distinct ranks in cohort order. A player missing from the cohort is rank 0.
    """
    _check_metric(metric, AGGREGATE_METRICS)
    ranked = sorted(cohort, key=lambda stats: getattr(stats, metric), reverse=True)
    for position, stats in enumerate(ranked, start=1):
        if stats.player_id == player_id:
            return PlayerRank(rank=position, total=len(ranked))
    return PlayerRank(rank=0, total=len(ranked))


def cohort_stats(records_by_player: Mapping[str, Sequence[PitchRecord]]) -> List[AggregateStats]:
    """One aggregate per player that has any records, in mapping order."""
    return [
        aggregate(records, player_id=player_id)
        for player_id, records in records_by_player.items()
        if records
    ]


def profile_ranking(records_by_player: Mapping[str, Sequence[PitchRecord]], player_id: str) -> ProfileRanking:
    cohort = cohort_stats(records_by_player)
    speed = percentile_rank(cohort, player_id, "max_speed")
    spin = percentile_rank(cohort, player_id, "max_spin")
    return ProfileRanking(speed_rank=speed.rank, spin_rank=spin.rank, total_players=len(cohort))
