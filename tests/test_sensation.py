import numpy as np
import pytest

from tanabe_zhang import construction as cons
from tanabe_zhang.matrix import KELVIN
from tanabe_zhang.sensation import (
    Branch, OverallSensation, local_sensation, overall_sensation, select_branch,
    extreme_forces, individual_forces, low_sensation, high_sensation, C3)


def neutral_tout():
    setpt = cons.setpoints()
    return np.append(setpt[3:-1:4], setpt[-1]) + KELVIN


def test_neutral_skin_gives_zero_sensation():
    assert np.allclose(local_sensation(neutral_tout()), 0.0)


def test_local_sensation_saturates():
    rng = np.random.default_rng(0)
    for _ in range(50):
        tout = neutral_tout() + rng.uniform(-25, 25, size=17)
        ls = local_sensation(tout, dtsk=rng.uniform(-0.1, 0.1, 16), dtcb=rng.uniform(-0.01, 0.01))
        assert np.all(ls >= -4) and np.all(ls <= 4)
    ls = local_sensation(neutral_tout() + 30, dtsk=1.0)
    assert np.allclose(ls, 4.0)
    ls = local_sensation(neutral_tout() - 30, dtsk=-1.0)
    assert np.allclose(ls, -4.0)


def test_local_sensation_is_monotonic_in_skin_temperature():
    previous = None
    for dt in np.linspace(-3, 3, 13):
        tout = neutral_tout()
        tout[:16] += dt
        ls = local_sensation(tout)
        if previous is not None:
            assert np.all(ls > previous)
        previous = ls


def test_warm_and_cool_coefficients_differ():
    tout = neutral_tout()
    tout[:16] += 1.0
    warm = local_sensation(tout)
    tout[:16] -= 2.0
    cool = local_sensation(tout)
    # head reacts faster to warming than to cooling
    assert warm[0] > -cool[0]


def test_skin_rate_term():
    still = local_sensation(neutral_tout())
    cooling = local_sensation(neutral_tout(), dtsk=-0.001)
    warming = local_sensation(neutral_tout(), dtsk=0.001)
    assert np.all(cooling < still)
    assert np.all(warming > still)


def test_core_rate_term_only_on_trunk_and_head():
    ls = local_sensation(neutral_tout(), dtcb=1e-4)
    assert np.allclose(ls[:4], C3[:4] * 1e-4)
    assert np.allclose(ls[4:], 0.0)


def test_local_sensation_input_length():
    with pytest.raises(ValueError):
        local_sensation(np.zeros(16))


def test_all_positive_ones():
    result = overall_sensation(np.ones(16))
    assert result.branch is Branch.NO_OPPOSITE_LOW
    assert result.n_plus == 16 and result.n_minus == 0
    assert result.value == pytest.approx(1.0)
    assert result.modifier == 0.0
    assert np.all(result.forces == 0)


def test_all_negative_ones():
    result = overall_sensation(-np.ones(16))
    assert result.branch is Branch.NO_OPPOSITE_LOW
    assert result.value == pytest.approx(-1.0)


def test_neutral_overall_sensation():
    result = overall_sensation(np.zeros(16))
    assert result.value == 0.0


def test_high_warm_sensation():
    result = overall_sensation(np.full(16, 3.0))
    assert result.branch is Branch.NO_OPPOSITE_HIGH
    assert result.value == pytest.approx(3.0)


def test_high_cool_sensation():
    ls = np.full(16, -1.0)
    ls[0], ls[1], ls[2] = -3.5, -3.0, -2.2
    result = overall_sensation(ls)
    assert result.branch is Branch.NO_OPPOSITE_HIGH
    assert result.value == pytest.approx(0.38 * -3.5 + 0.62 * -2.2)


def test_low_sensation_band_excludes_mild_votes():
    ls = np.zeros(16)
    ls[:4] = [1.5, 1.2, 1.0, 0.9]
    assert overall_sensation(ls).value == pytest.approx((1.5 + 1.2 + 1.0) / 3)


def test_low_sensation_band_includes_deep_votes():
    ls = np.full(16, 1.9)
    ls[4] = 0.5
    assert overall_sensation(ls).value == pytest.approx((13 * 1.9 + 0.5) / 14)


def test_low_sensation_without_votes():
    assert low_sensation(np.array([]), True) == 0.0
    assert low_sensation(np.array([-0.4, -1.0]), False) == pytest.approx(-0.7)


def test_high_sensation_needs_three_votes():
    assert high_sensation(np.array([3.0, 3.0]), True) is None


def test_mild_opposite_votes_are_ignored():
    ls = np.full(16, 1.5)
    ls[8] = ls[9] = -0.5
    result = overall_sensation(ls)
    assert result.branch is Branch.NO_OPPOSITE_LOW
    assert result.value == pytest.approx(1.5)
    assert result.modifier == 0.0


def warm_with_cold_limbs():
    ls = np.full(16, 1.5)
    ls[6] = ls[7] = -2.5  # arms
    ls[14] = ls[15] = -1.5  # feet
    return ls


def test_opposite_sensation_modifier():
    result = overall_sensation(warm_with_cold_limbs())
    assert result.branch is Branch.OPPOSITE_LOW
    assert result.big == pytest.approx(1.5)
    assert result.modifier == pytest.approx(-0.65 - 0.065)
    assert result.value == pytest.approx(1.5 - 0.715)


def test_opposite_sensation_uses_baseline():
    baseline = warm_with_cold_limbs()
    baseline[6] = baseline[7] = -1.0
    result = overall_sensation(warm_with_cold_limbs(), baseline)
    assert result.modifier == pytest.approx(-0.45 - 0.045)
    assert result.value == pytest.approx(1.5 - 0.495)


def test_trunk_cooling_override():
    ls = warm_with_cold_limbs()
    ls[1] = -1.2
    result = overall_sensation(ls)
    assert result.branch is Branch.OPPOSITE_COOLING
    assert result.value == pytest.approx(-1.2)
    assert result.modifier == 0.0


def test_cool_dominant_with_warm_head():
    ls = np.full(16, -1.5)
    ls[0] = ls[1] = 2.5
    result = overall_sensation(ls)
    assert result.branch is Branch.OPPOSITE_LOW
    assert result.modifier == pytest.approx(0.65 + 0.065)
    assert result.value == pytest.approx(-1.5 + 0.715)


def test_opposite_high_sensation():
    ls = np.full(16, 3.0)
    ls[6] = ls[7] = -2.5
    assert select_branch(ls) is Branch.OPPOSITE_HIGH
    result = overall_sensation(ls)
    assert result.branch is Branch.OPPOSITE_HIGH
    # 0.5/0.5 on the 1st and 3rd warm votes
    assert result.big == pytest.approx(3.0)
    assert result.modifier == pytest.approx(-0.65 - 0.065)
    assert result.value == pytest.approx(3.0 - 0.715)


def test_opposite_high_cool_sensation():
    ls = np.full(16, -3.0)
    ls[0] = -3.5
    ls[4] = ls[5] = 2.5  # shoulders
    result = overall_sensation(ls)
    assert result.branch is Branch.OPPOSITE_HIGH
    assert result.big == pytest.approx(0.38 * -3.5 + 0.62 * -3.0)
    assert result.modifier == pytest.approx(0.65 + 0.065)


def test_minority_segment_warmer_than_its_baseline():
    ls = np.full(16, 1.5)
    ls[6] = ls[7] = -1.5
    baseline = ls.copy()
    baseline[6] = baseline[7] = -3.0
    result = overall_sensation(ls, baseline)
    assert result.branch is Branch.OPPOSITE_LOW
    assert result.forces[6] == pytest.approx(0.45)
    assert result.modifier == pytest.approx(0.45 + 0.045)
    assert result.value == pytest.approx(1.5 + 0.495)


def test_extreme_forces_by_magnitude():
    forces = np.zeros(16)
    forces[[6, 7, 14]] = [0.3, -0.65, 0.45]
    mask = np.zeros(16, dtype=bool)
    mask[[6, 7, 14]] = True
    assert extreme_forces(forces, mask) == pytest.approx((-0.65, 0.45))
    mask[7] = False
    assert extreme_forces(forces, mask) == pytest.approx((0.45, 0.3))
    single = np.zeros(16, dtype=bool)
    single[6] = True
    assert extreme_forces(forces, single) == pytest.approx((0.3, 0.0))


def test_forces_zeroed_on_dominant_side():
    ls = warm_with_cold_limbs()
    forces = individual_forces(ls, np.zeros(16), warm=True)
    assert np.all(forces[ls > 0] == 0)
    assert np.all(forces[ls < 0] < 0)


def test_memory_captures_pre_event_sensation():
    model = OverallSensation()
    before = np.full(16, 0.3)
    after = np.full(16, 1.2)
    model.compute(before, (False, True))
    model.compute(after, (True, False))
    assert np.array_equal(model.memory_on, before)
    assert np.all(model.memory_off == 0)

    model.compute(np.full(16, 2.0), (True, False))
    assert np.array_equal(model.memory_on, before)

    model.compute(np.full(16, -0.5), (False, True))
    assert np.all(model.memory_off == 2.0)
    assert model.baseline((False, True)) is model.memory_off
    assert model.baseline((True, False)) is model.memory_on
    assert np.all(model.baseline((False, False)) == 0)


def test_memory_ignores_initial_flags():
    model = OverallSensation()
    model.compute(np.ones(16), (True, False))
    assert np.all(model.memory_on == 0)
