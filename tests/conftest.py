import pytest

from pitch_tracker.models import PitchRecord


def make_record(player_id="p1", date="2024/05/01", speed=0.0, spin=0, **extra) -> PitchRecord:
    return PitchRecord(player_id=player_id, date=date, speed=speed, spin=spin, **extra)


@pytest.fixture()
def roster_records():
    """Two pitchers over two months, uploaded in device order."""
    return [
        make_record("ace", "2024/04/28", speed=140.0, spin=2300, true_spin=2100,
                    spin_efficiency=90.0, strike=True),
        make_record("ace", "2024/05/02", speed=150.0, spin=2400, true_spin=2200,
                    spin_efficiency=92.0, strike=True),
        make_record("ace", "2024/05/10", speed=145.0, spin=2350, true_spin=2150,
                    spin_efficiency=91.0, strike=False),
        make_record("lefty", "2024/05/03", speed=128.0, spin=2100, true_spin=1800,
                    spin_efficiency=85.0, strike=True),
        make_record("lefty", "2024/05/20", speed=132.0, spin=0, true_spin=0,
                    spin_efficiency=0.0, strike=False),
    ]
