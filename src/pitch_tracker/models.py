# src/pitch_tracker/models.py
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Untyped upload row: header -> cell value, exactly as stored.
RawRecord = Dict[str, Any]


class PitchRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    date: str = ""
    speed: float = 0.0                  # kph
    spin: int = 0                       # rpm
    true_spin: int = 0
    spin_efficiency: float = 0.0        # percent, 0-100
    spin_direction: str = ""            # clock label, "3:00"
    vertical_movement: float = 0.0      # cm
    horizontal_movement: float = 0.0    # cm
    strike: bool = False
    release_point: float = 0.0          # release height, m
    rating: str = ""
    document_id: Optional[str] = None


class AggregateStats(BaseModel):
    player_id: Optional[str] = None
    count: int = 0
    avg_speed: float = 0.0
    max_speed: float = 0.0
    avg_spin: float = 0.0
    max_spin: float = 0.0
    avg_true_spin: float = 0.0
    avg_spin_efficiency: float = 0.0
    strike_rate: float = 0.0


class RankingEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    value: float
    date: str = ""


class PlayerRank(BaseModel):
    rank: int          # 1-based, 0 when the player is not in the cohort
    total: int


class ProfileRanking(BaseModel):
    speed_rank: int
    spin_rank: int
    total_players: int


class PlayerSummary(BaseModel):
    max_speed: float = 0.0
    avg_speed: float = 0.0
    max_spin: float = 0.0
    avg_spin: float = 0.0
    recent_speed: Optional[float] = None
    total_records: int = 0
    last_record_date: str = "-"


class RecentRecord(BaseModel):
    date: str
    speed: float
    spin: float


class MetricSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str                            # AggregateStats field
    label: str
    ceiling: Optional[float] = None     # fixed 0-100 scale reference
    field: Optional[str] = None         # per-pitch PitchRecord field behind the metric
    percentage: bool = False


class ChartSeriesPoint(BaseModel):
    label: str
    values: Dict[str, float] = Field(default_factory=dict)  # entity id -> value, missing = no data


class TrendLine(BaseModel):
    slope: float
    intercept: float


class TrendSegment(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float


class AxisBounds(BaseModel):
    low: float
    high: float


class ScatterPoint(BaseModel):
    spin: float
    speed: float
    date: str
    strike: bool
    alpha: float


class SeriesPoint(BaseModel):
    name: str              # month number, blank when unchanged from the previous bar
    display_date: str      # "M/D"
    value: float
