import pytest

from pitch_tracker.aggregate import aggregate, average, maximum, recent_records, summarize_player

from conftest import make_record


def test_aggregate_empty_is_all_zero():
    stats = aggregate([])

    assert stats.count == 0
    assert stats.avg_speed == 0
    assert stats.max_speed == 0
    assert stats.avg_spin == 0
    assert stats.max_spin == 0
    assert stats.strike_rate == 0
    assert stats.player_id is None


def test_aggregate_one_player(roster_records):
    ace = [r for r in roster_records if r.player_id == "ace"]

    stats = aggregate(ace)

    assert stats.player_id == "ace"
    assert stats.count == 3
    assert stats.avg_speed == pytest.approx(145.0)
    assert stats.max_speed == 150.0
    assert stats.avg_spin == pytest.approx(2350.0)
    assert stats.max_spin == 2400
    assert stats.avg_true_spin == pytest.approx(2150.0)
    assert stats.avg_spin_efficiency == pytest.approx(91.0)
    assert stats.strike_rate == pytest.approx(200 / 3)


def test_aggregate_mixed_slice_has_no_player_id(roster_records):
    assert aggregate(roster_records).player_id is None
    assert aggregate(roster_records, player_id="team").player_id == "team"


def test_strike_rate_bounds(roster_records):
    for size in range(1, len(roster_records) + 1):
        rate = aggregate(roster_records[:size]).strike_rate
        assert 0 <= rate <= 100


def test_aggregate_is_idempotent(roster_records):
    snapshot = list(roster_records)
    assert aggregate(roster_records) == aggregate(roster_records)
    assert roster_records == snapshot


def test_average_and_maximum_guard_empty():
    assert average([], "speed") == 0.0
    assert maximum([], "spin") == 0.0


def test_summarize_player_ignores_missing_measurements(roster_records):
    lefty = [r for r in roster_records if r.player_id == "lefty"]

    summary = summarize_player(lefty)

    assert summary.total_records == 2
    assert summary.max_speed == 132.0
    assert summary.avg_speed == pytest.approx(130.0)
    # the 0 rpm row is a missing reading, not a slow spin
    assert summary.max_spin == 2100.0
    assert summary.avg_spin == pytest.approx(2100.0)
    assert summary.recent_speed == 132.0
    assert summary.last_record_date == "2024/05/20"


def test_summarize_player_without_data():
    summary = summarize_player([])

    assert summary.total_records == 0
    assert summary.max_speed == 0
    assert summary.recent_speed is None
    assert summary.last_record_date == "-"


def test_recent_records_newest_first():
    records = [make_record(date=f"2024/05/{day:02d}", speed=100 + day, spin=2000 + day) for day in range(1, 8)]

    recent = recent_records(records, n=5)

    assert [r.date for r in recent] == ["2024/05/07", "2024/05/06", "2024/05/05", "2024/05/04", "2024/05/03"]
    assert recent[0].speed == 107.0
    assert recent_records(records, n=0) == []
