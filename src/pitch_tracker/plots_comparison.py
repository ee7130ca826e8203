# src/pitch_tracker/plots_comparison.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence
import math
import re

import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns

from .models import ChartSeriesPoint

# One color per comparison slot, in selection order
PLAYER_COLORS = ["#8095ff", "#7cffc2", "#000000", "#ff5959", "#a47dff"]


def _slug(name: str) -> str:
    return re.sub(r"\s+", "_", name.strip())


def _player_order(points: Sequence[ChartSeriesPoint]) -> List[str]:
    order: List[str] = []
    for point in points:
        for player_id in point.values:
            if player_id not in order:
                order.append(player_id)
    return order


def _long_frame(points: Sequence[ChartSeriesPoint], names: Mapping[str, str]) -> pd.DataFrame:
    rows = [
        {"metric": point.label, "player": names.get(player_id, player_id), "value": value}
        for point in points
        for player_id, value in point.values.items()
    ]
    return pd.DataFrame(rows, columns=["metric", "player", "value"])


def _palette(order: Sequence[str], names: Mapping[str, str]) -> Dict[str, str]:
    return {names.get(pid, pid): PLAYER_COLORS[i % len(PLAYER_COLORS)] for i, pid in enumerate(order)}


def render_comparison_bar_png(
    points: Sequence[ChartSeriesPoint],
    names: Mapping[str, str],
    out_dir: str = "build/figures",
    title: str = "comparison",
    dpi: int = 300,
) -> Optional[str]:
    """
    points: bar series from comparison.build_comparison_series, already on a
            0-100 scale; names maps player id -> display name
    """
    d = _long_frame(points, names)
    if d.empty:
        return None
    Path(out_dir).mkdir(parents=True, exist_ok=True)

    order = _player_order(points)
    palette = _palette(order, names)
    hue_order = [names.get(pid, pid) for pid in order]

    sns.set_style("whitegrid")
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.barplot(
        data=d, y="metric", x="value", hue="player", orient="h",
        palette=palette, hue_order=hue_order, ax=ax
    )
    ax.set_xlim(0, max(100.0, float(d["value"].max())))
    ax.set_xlabel("Scaled value (0-100)", fontsize=12, weight="bold")
    ax.set_ylabel("")
    ax.legend(title="Player", bbox_to_anchor=(1.02, 1), loc="upper left", borderaxespad=0.0)

    plt.tight_layout()
    out_path = Path(out_dir) / f"{_slug(title)}_bar.png"
    fig.savefig(out_path, dpi=dpi, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return str(out_path)


def render_radar_png(
    points: Sequence[ChartSeriesPoint],
    names: Mapping[str, str],
    out_dir: str = "build/figures",
    title: str = "comparison",
    dpi: int = 300,
) -> Optional[str]:
    if len(points) < 3 or not any(point.values for point in points):
        return None  # a polygon needs at least three axes
    Path(out_dir).mkdir(parents=True, exist_ok=True)

    labels = [point.label for point in points]
    angles = [2 * math.pi * i / len(labels) for i in range(len(labels))]
    angles.append(angles[0])

    fig, ax = plt.subplots(figsize=(8, 8), subplot_kw={"projection": "polar"})
    ax.set_ylim(0, 100)
    ax.set_xticks(angles[:-1])
    ax.set_xticklabels(labels, fontsize=11)
    ax.grid(color="#e0e0e0")

    for i, player_id in enumerate(_player_order(points)):
        color = PLAYER_COLORS[i % len(PLAYER_COLORS)]
        # missing metrics leave a gap in the outline, they are not zeros
        values = [point.values.get(player_id, math.nan) for point in points]
        values.append(values[0])
        ax.plot(angles, values, color=color, linewidth=2, marker="o", label=names.get(player_id, player_id))
        if not any(math.isnan(v) for v in values):
            ax.fill(angles, values, color=color, alpha=0.3)

    ax.legend(loc="upper right", bbox_to_anchor=(1.3, 1.1))
    out_path = Path(out_dir) / f"{_slug(title)}_radar.png"
    fig.savefig(out_path, dpi=dpi, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return str(out_path)
