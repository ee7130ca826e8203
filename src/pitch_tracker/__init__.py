from .aggregate import aggregate, recent_records, summarize_player
from .analysis import PitchAnalysis
from .comparison import (
    BAR_METRICS,
    RADAR_METRICS,
    build_comparison_series,
    build_radar_series,
    comparison_table,
)
from .models import (
    AggregateStats,
    ChartSeriesPoint,
    MetricSpec,
    PitchRecord,
    PlayerRank,
    RankingEntry,
    TrendLine,
)
from .normalize import normalize, normalize_many
from .rankings import percentile_rank, profile_ranking, top_n
from .trend import linear_regression

__version__ = "0.1.0"
