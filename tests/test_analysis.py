import copy
from pathlib import Path

import pytest

from pitch_tracker.analysis import PitchAnalysis
from pitch_tracker.settings_manager import DEFAULT_SETTINGS


@pytest.fixture()
def analysis(roster_records):
    return PitchAnalysis(roster_records, settings=copy.deepcopy(DEFAULT_SETTINGS))


def test_player_ids(analysis):
    assert analysis.player_ids() == ["ace", "lefty"]


def test_individual_view(analysis):
    view = analysis.individual("ace", "2024-05-01", "2024-05-31")

    assert view["stats"].count == 2
    assert view["stats"].avg_speed == pytest.approx(147.5)
    assert [p.display_date for p in view["speed_series"]] == ["5/2", "5/10"]
    assert len(view["scatter"]) == 2
    assert view["trend"] is not None
    assert view["speed_bounds"].low < 145.0 < view["speed_bounds"].high


def test_individual_view_without_data(analysis):
    view = analysis.individual("ghost")

    assert view["stats"].count == 0
    assert view["scatter"] == []
    assert view["trend"] is None


def test_comparison_uses_configured_ceilings(roster_records):
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings["ceilings"]["avg_speed"] = 150
    analysis = PitchAnalysis(roster_records, settings=settings)

    view = analysis.comparison(["ace", "lefty"])

    assert view["bar"][0].values["ace"] == 96.7
    assert [row.player_id for row in view["table"]] == ["ace", "lefty"]
    assert len(view["radar"]) == 5


def test_comparison_respects_player_limit(roster_records):
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings["analysis"]["max_comparison_players"] = 1
    analysis = PitchAnalysis(roster_records, settings=settings)

    view = analysis.comparison(["lefty", "ace"])

    assert list(view["bar"][0].values) == ["lefty"]


def test_leaderboard_defaults_to_configured_size(analysis):
    board = analysis.leaderboard("speed")

    assert len(board) == 5
    assert board[0].value == 150.0
    assert len(analysis.leaderboard("speed", n=2)) == 2


def test_profile(analysis):
    profile = analysis.profile("lefty")

    assert profile["summary"].max_speed == 132.0
    assert profile["recent"][0].date == "2024/05/20"
    assert profile["ranking"].speed_rank == 2
    assert profile["ranking"].total_players == 2


def test_settings_loaded_when_not_given(roster_records, tmp_path, monkeypatch):
    monkeypatch.setenv("PITCH_TRACKER_CONFIG_DIR", str(tmp_path / "config"))

    analysis = PitchAnalysis(roster_records)

    assert analysis.top_n == 5


def test_language_setting_drives_date_labels(roster_records):
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings["analysis"]["language"] = "en"
    analysis = PitchAnalysis(roster_records, settings=settings)

    view = analysis.individual("ace", "2024-05-01", "2024-05-31")
    profile = analysis.profile("lefty")

    assert [p.display_date for p in view["speed_series"]] == ["May 2", "May 10"]
    assert profile["last_record_label"] == "May 20, 2024"


def test_profile_label_defaults_to_japanese(analysis):
    assert analysis.language == "ja"
    assert analysis.profile("lefty")["last_record_label"] == "2024年5月20日"


def test_render_comparison_uses_plot_settings(roster_records, tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings["plots"] = {"out_dir": str(tmp_path / "figures"), "dpi": 40}
    analysis = PitchAnalysis(roster_records, settings=settings)

    paths = analysis.render_comparison(["ace", "lefty"], {"ace": "Taro Yamada"}, title="spring")

    assert Path(paths["bar"]) == tmp_path / "figures" / "spring_bar.png"
    assert Path(paths["radar"]) == tmp_path / "figures" / "spring_radar.png"
    assert Path(paths["bar"]).stat().st_size > 0


def test_render_comparison_without_data(analysis, tmp_path):
    analysis.settings["plots"]["out_dir"] = str(tmp_path)

    assert analysis.render_comparison(["ghost"]) == {"bar": None, "radar": None}
