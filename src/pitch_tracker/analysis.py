# src/pitch_tracker/analysis.py
"""
Analysis views over a team's pitch records.
Bundles filtering, aggregation, rankings and chart series the way the
analysis tabs (individual / comparison) and the player page consume them.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from . import settings_manager
from .aggregate import aggregate, recent_records, summarize_player
from .comparison import (
    BAR_METRICS,
    RADAR_METRICS,
    build_comparison_series,
    build_radar_series,
    comparison_table,
    metrics_with_ceilings,
)
from .dates import format_record_date
from .filters import DateLike, filter_by_date_range, group_by_player
from .models import PitchRecord, RankingEntry
from .rankings import profile_ranking, top_n
from .series import (
    SPEED_FALLBACK_PADDING,
    SPIN_FALLBACK_PADDING,
    axis_bounds,
    date_series,
    scatter_points,
    trend_segment,
)

logger = logging.getLogger(__name__)


class PitchAnalysis:
    """Read-only views over a snapshot of pitch records"""

    def __init__(self, records: Iterable[PitchRecord], settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the analysis over a record snapshot

        Args:
            records: Normalized pitches for every player on the roster.
            settings: Settings dictionary. If None, loads it via settings_manager.
        """
        self.records: List[PitchRecord] = list(records)
        self.settings = settings if settings is not None else settings_manager.load_settings()
        self._by_player = group_by_player(self.records)

    @property
    def top_n(self) -> int:
        return int(settings_manager.get_setting(self.settings, "analysis.top_n"))

    @property
    def max_comparison_players(self) -> int:
        return int(settings_manager.get_setting(self.settings, "analysis.max_comparison_players"))

    @property
    def language(self) -> str:
        return str(settings_manager.get_setting(self.settings, "analysis.language"))

    def player_ids(self) -> List[str]:
        return list(self._by_player)

    def records_for(self, player_id: str, start: DateLike = None, end: DateLike = None) -> List[PitchRecord]:
        return filter_by_date_range(self._by_player.get(player_id, []), start, end)

    def individual(self, player_id: str, start: DateLike = None, end: DateLike = None) -> Dict[str, Any]:
        """
        Data behind the individual tab for one player

        Returns:
            Dictionary with stats, speed/spin bars, scatter points, axis bounds
            and the trend segment. ``stats.count`` is 0 when the player has no
            pitches in range.
        """
        records = self.records_for(player_id, start, end)
        speeds = [record.speed for record in records]
        spins = [float(record.spin) for record in records]
        return {
            "player_id": player_id,
            "stats": aggregate(records, player_id=player_id),
            "speed_series": date_series(records, "speed", self.language),
            "spin_series": date_series(records, "spin", self.language),
            "scatter": scatter_points(records),
            "speed_bounds": axis_bounds(speeds, SPEED_FALLBACK_PADDING),
            "spin_bounds": axis_bounds(spins, SPIN_FALLBACK_PADDING),
            "trend": trend_segment(records) if records else None,
        }

    def comparison(self, player_ids: Sequence[str], start: DateLike = None, end: DateLike = None) -> Dict[str, Any]:
        """Bar, radar and table data for up to ``max_comparison_players`` players"""
        limit = self.max_comparison_players
        records_by_player = {pid: self.records_for(pid, start, end) for pid in player_ids}
        bar_metrics = metrics_with_ceilings(BAR_METRICS, self.settings.get("ceilings", {}))
        return {
            "bar": build_comparison_series(player_ids, records_by_player, bar_metrics, limit=limit),
            "radar": build_radar_series(player_ids, records_by_player, RADAR_METRICS, limit=limit),
            "table": comparison_table(player_ids, records_by_player, limit=limit),
        }

    def leaderboard(self, metric: str = "speed", n: Optional[int] = None,
                    start: DateLike = None, end: DateLike = None) -> List[RankingEntry]:
        records = filter_by_date_range(self.records, start, end)
        return top_n(records, metric, self.top_n if n is None else n)

    def profile(self, player_id: str) -> Dict[str, Any]:
        """Player page: summary card, latest records and team ranking"""
        records = self._by_player.get(player_id, [])
        if not records:
            logger.info("No uploaded data for player %s", player_id)
        summary = summarize_player(records)
        return {
            "player_id": player_id,
            "summary": summary,
            "last_record_label": format_record_date(summary.last_record_date, self.language),
            "recent": recent_records(records, self.top_n),
            "ranking": profile_ranking(self._by_player, player_id),
        }

    def render_comparison(self, player_ids: Sequence[str], names: Optional[Dict[str, str]] = None,
                          start: DateLike = None, end: DateLike = None,
                          title: str = "comparison") -> Dict[str, Optional[str]]:
        """
        Write the comparison bar and radar charts as PNGs

        Args:
            player_ids: Players to compare, in selection order.
            names: Player id -> display name for the legend. Ids are used when missing.
            title: File name stem for both images.

        Returns:
            Dictionary with the "bar" and "radar" PNG paths, None where there was
            nothing to draw. Files go to ``plots.out_dir`` at ``plots.dpi``.
        """
        from .plots_comparison import render_comparison_bar_png, render_radar_png

        view = self.comparison(player_ids, start, end)
        out_dir = str(settings_manager.get_setting(self.settings, "plots.out_dir"))
        dpi = int(settings_manager.get_setting(self.settings, "plots.dpi"))
        names = names or {}
        return {
            "bar": render_comparison_bar_png(view["bar"], names, out_dir=out_dir, title=title, dpi=dpi),
            "radar": render_radar_png(view["radar"], names, out_dir=out_dir, title=title, dpi=dpi),
        }
