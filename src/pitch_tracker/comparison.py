# src/pitch_tracker/comparison.py
"""
Chart-ready series for comparing up to five players.

Bar charts scale every metric against a fixed ceiling so kph, rpm and
percentages share one 0-100 axis. Radar charts scale unit-bearing metrics
against the best single pitch in the selected group instead.
"""
from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence

from .aggregate import aggregate
from .filters import select_comparison_players
from .models import AggregateStats, ChartSeriesPoint, MetricSpec, PitchRecord

logger = logging.getLogger(__name__)

MAX_COMPARISON_PLAYERS = 5

BAR_METRICS: List[MetricSpec] = [
    MetricSpec(key="avg_speed", label="Average Speed", ceiling=200, field="speed"),
    MetricSpec(key="max_speed", label="Max Speed", ceiling=200, field="speed"),
    MetricSpec(key="avg_spin", label="Average Spin", ceiling=3000, field="spin"),
    MetricSpec(key="avg_true_spin", label="Average True Spin", ceiling=3000, field="true_spin"),
    MetricSpec(key="avg_spin_efficiency", label="Average Spin Efficiency", ceiling=100,
               field="spin_efficiency", percentage=True),
    MetricSpec(key="strike_rate", label="Strike Rate", ceiling=100, percentage=True),
]

RADAR_METRICS: List[MetricSpec] = [
    MetricSpec(key="avg_speed", label="Average Speed", field="speed"),
    MetricSpec(key="avg_spin", label="Average Spin", field="spin"),
    MetricSpec(key="avg_true_spin", label="Average True Spin", field="true_spin"),
    MetricSpec(key="avg_spin_efficiency", label="Average Spin Efficiency",
               field="spin_efficiency", percentage=True),
    MetricSpec(key="strike_rate", label="Strike Rate", percentage=True),
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _round_tenth_half_up(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def metrics_with_ceilings(metrics: Sequence[MetricSpec], ceilings: Mapping[str, float]) -> List[MetricSpec]:
    """Copy ``metrics`` with ceilings overridden by key where configured."""
    result = []
    for spec in metrics:
        ceiling = ceilings.get(spec.key)
        if ceiling:
            spec = spec.model_copy(update={"ceiling": float(ceiling)})
        result.append(spec)
    return result


def _selected_stats(
    players: Sequence[str],
    records_by_player: Mapping[str, Sequence[PitchRecord]],
    limit: int,
) -> Dict[str, AggregateStats]:
    selected = select_comparison_players(players, limit=limit)
    stats: Dict[str, AggregateStats] = {}
    for player_id in selected:
        records = records_by_player.get(player_id) or []
        if records:
            stats[player_id] = aggregate(records, player_id=player_id)
    return stats


def build_comparison_series(
    players: Sequence[str],
    records_by_player: Mapping[str, Sequence[PitchRecord]],
    metrics: Sequence[MetricSpec] = BAR_METRICS,
    limit: int = MAX_COMPARISON_PLAYERS,
) -> List[ChartSeriesPoint]:
    """
    Bar-chart series: one point per metric, ``raw / ceiling * 100`` rounded
    half up to one decimal. Players without records are left out of every point.
    """
    stats = _selected_stats(players, records_by_player, limit)
    points = []
    for spec in metrics:
        ceiling = spec.ceiling or 100.0
        values = {
            player_id: _round_tenth_half_up(getattr(player_stats, spec.key) / ceiling * 100)
            for player_id, player_stats in stats.items()
        }
        points.append(ChartSeriesPoint(label=spec.label, values=values))
    return points


def _observed_max(
    spec: MetricSpec,
    stats: Mapping[str, AggregateStats],
    records_by_player: Mapping[str, Sequence[PitchRecord]],
) -> float:
    if spec.field:
        observed = [
            float(getattr(record, spec.field))
            for player_id in stats
            for record in records_by_player.get(player_id) or []
        ]
    else:
        observed = [getattr(player_stats, spec.key) for player_stats in stats.values()]
    peak = max(observed) if observed else 0.0
    return peak if peak != 0 else 1.0


def build_radar_series(
    players: Sequence[str],
    records_by_player: Mapping[str, Sequence[PitchRecord]],
    metrics: Sequence[MetricSpec] = RADAR_METRICS,
    limit: int = MAX_COMPARISON_PLAYERS,
) -> List[ChartSeriesPoint]:
    """
    Radar-chart series on a whole-number 0-100 scale.

    Percentage metrics are used as they are; everything else is divided by the
    largest single pitch value among the selected players.
    """
    stats = _selected_stats(players, records_by_player, limit)
    points = []
    for spec in metrics:
        scale: Optional[float] = None if spec.percentage else _observed_max(spec, stats, records_by_player)
        values = {}
        for player_id, player_stats in stats.items():
            raw = getattr(player_stats, spec.key)
            value = raw if scale is None else raw / scale * 100
            values[player_id] = float(_round_half_up(value))
        points.append(ChartSeriesPoint(label=spec.label, values=values))
    return points


def comparison_table(
    players: Sequence[str],
    records_by_player: Mapping[str, Sequence[PitchRecord]],
    limit: int = MAX_COMPARISON_PLAYERS,
) -> List[AggregateStats]:
    return list(_selected_stats(players, records_by_player, limit).values())
