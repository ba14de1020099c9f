import pytest

from tanabe_zhang.comfmod import pmv, preferred_temp


def test_pmv_sign():
    assert pmv(18, 18, 0.1, 50, 1.0, 0.5) < 0
    assert pmv(32, 32, 0.1, 50, 1.0, 0.5) > 0


def test_preferred_temp_is_neutral():
    to = preferred_temp(va=0.1, rh=50, met=1.0, clo=0.0)
    assert 26 < to < 32
    assert pmv(to, to, 0.1, 50, 1.0, 0.0) == pytest.approx(0.0, abs=0.001)


def test_clothing_lowers_preferred_temp():
    assert preferred_temp(clo=1.0) < preferred_temp(clo=0.0)
