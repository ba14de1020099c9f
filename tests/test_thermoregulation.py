import numpy as np
import pytest

from tanabe_zhang import construction as cons
from tanabe_zhang import thermoregulation as threg


def test_fixed_hc_replaces_non_positive_values():
    hc = threg.fixed_hc([-1.0, 0.0, 5.0, np.nan])
    assert list(hc) == [threg.HC_FALLBACK, threg.HC_FALLBACK, 5.0, threg.HC_FALLBACK]


def test_total_htc_series_resistance():
    hc = np.array([3.0, 3.0])
    hr = np.array([4.9, 4.9])
    clo = np.array([0.0, 1.0])
    h_t = threg.total_htc(hc, hr, clo)
    assert h_t[0] == pytest.approx(7.9)
    fcl = 1.15
    assert h_t[1] == pytest.approx(1 / (0.155 + 1 / (3.0 + 4.9 * fcl)))


def test_operative_temp_weighting():
    to = threg.operative_temp(np.array([20.0]), 30.0, np.array([3.0]), np.array([1.0]))
    assert to[0] == pytest.approx(22.5)


def test_warm_and_cold_signals_are_exclusive():
    err = np.random.default_rng(0).normal(size=(16, 4))
    err_out, wrm, cld = threg.error_signals(err, np.zeros((16, 4)))
    assert np.array_equal(err_out, err)
    assert np.all(wrm * cld == 0)
    assert np.all(wrm >= 0) and np.all(cld >= 0)


def test_rate_term_only_with_gain():
    tissue = np.ones((16, 4))
    rate = np.ones((16, 4))
    err, _, _ = threg.error_signals(tissue, np.zeros((16, 4)), rate, 0.0)
    assert np.all(err == 1)
    err, _, _ = threg.error_signals(tissue, np.zeros((16, 4)), rate, 2.0)
    assert np.all(err == 3)


def _signals(err):
    return threg.control_signals(*threg.error_signals(err, np.zeros((16, 4))))


def test_no_error_no_response():
    ctrl = _signals(np.zeros((16, 4)))
    assert np.all(ctrl.sweat == 0)
    assert np.all(ctrl.shiver == 0)
    assert ctrl.dilation == 0
    assert ctrl.constriction == 0
    assert np.all(ctrl.km == 1)


def test_warm_skin_sweats_and_dilates():
    err = np.zeros((16, 4))
    err[:, 3] = 1.0
    ctrl = _signals(err)
    assert ctrl.wrms == pytest.approx(cons.SKINR.sum())
    assert ctrl.clds == 0
    assert np.all(ctrl.sweat > 0)
    assert np.allclose(ctrl.km, 2 ** 0.1)
    assert ctrl.dilation == pytest.approx(cons.SKIN.dilation * ctrl.wrms)
    assert ctrl.constriction == 0
    assert np.all(ctrl.shiver == 0)


def test_cold_body_shivers_and_constricts():
    err = np.zeros((16, 4))
    err[:, 3] = -1.0
    err[0, 0] = -0.5
    ctrl = _signals(err)
    expected = cons.PERIPHERAL.shiver * 0.5 * ctrl.clds * cons.CHILF
    assert np.allclose(ctrl.shiver, expected)
    assert ctrl.constriction > 0
    assert ctrl.dilation == 0
    assert np.all(ctrl.sweat == 0)


def test_skin_bloodflow_follows_vasomotion():
    bfb = cons.basal_bloodflow()
    mwork = np.zeros(16)
    neutral = threg.bloodflow(bfb, mwork, _signals(np.zeros((16, 4))))
    assert np.allclose(neutral, bfb)

    err = np.zeros((16, 4))
    err[:, 3] = -2.0
    cold = threg.bloodflow(bfb, mwork, _signals(err))
    assert np.all(cold[:, 3] < bfb[:, 3])


def test_work_heat():
    mbase = cons.local_mbase()
    bsa = cons.localbsa()
    assert np.all(threg.local_mwork(0.5, mbase, bsa) == 0)
    mwork = threg.local_mwork(2.0, mbase, bsa)
    assert mwork[0] == 0  # head does no work
    total = cons.MET_UNIT * (2.0 - threg.basal_met_rate(mbase, bsa)) * bsa.sum()
    assert mwork.sum() == pytest.approx(total * cons.METF.sum())


def test_evaporation_limits():
    n = 16
    tsk = np.full(n, 34.0)
    ta = np.full(n, 25.0)
    rh = np.full(n, 50.0)
    hc = np.full(n, 3.0)
    clo = np.zeros(n)
    bsa = cons.localbsa()

    wet, e_sk, e_max = threg.evaporation(tsk, ta, rh, hc, clo, bsa, np.zeros(n))
    assert np.all(e_max > 0)
    assert np.allclose(e_sk, threg.EB_RATE * e_max)
    assert np.allclose(wet, threg.EB_RATE)

    wet, e_sk, e_max = threg.evaporation(tsk, ta, rh, hc, clo, bsa, np.full(n, 1000.0))
    assert np.allclose(e_sk, e_max)
    assert np.allclose(wet, 1.0)


def test_no_evaporative_capacity():
    n = 16
    wet, e_sk, e_max = threg.evaporation(
            np.full(n, 20.0), np.full(n, 40.0), np.full(n, 90.0), np.full(n, 3.0),
            np.zeros(n), cons.localbsa(), np.full(n, 5.0))
    assert np.all(e_max == 0)
    assert np.all(e_sk == 0)
    assert np.allclose(wet, threg.EB_RATE)


def test_respiration_vanishes_at_expired_air_state():
    res_sh, res_lh = threg.resp_heatloss(34.0, 5.867, 100.0)
    assert res_sh == pytest.approx(0.0)
    assert res_lh == pytest.approx(0.0)
    res_sh, res_lh = threg.resp_heatloss(20.0, 1.0, 100.0)
    assert res_sh > 0 and res_lh > 0
