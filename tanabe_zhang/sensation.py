# -*- coding: utf-8 -*-
"""
Local and overall thermal sensation.

Local sensation is a logistic function of the skin temperature deviation
with dynamic terms for the skin and core temperature rates. Overall
sensation combines the 16 local votes with rank-based rules and, when warm
and cool votes coexist, an opposite-sensation modifier that remembers the
local sensation just before the last load event.
"""
import enum
import logging
from collections import namedtuple

import numpy as np

from . import construction as cons
from .construction import _expand
from .matrix import NUM_SEGMENTS, KELVIN, TRUNK
from .ranking import rank, dedupe_pairs

logger = logging.getLogger(__name__)

# Static and dynamic coefficients per region
# C1 cool, C1 warm, K1, C2 cool [s/K], C2 warm [s/K], C3 [s/K]
_LS_COEF = _expand([
        [0.38, 1.32, 0.18, 543., 90., -2289.],
        [0.35, 0.60, 0.10, 39., 136., -2289.],
        [0.30, 0.70, 0.10, 88., 192., -2289.],
        [0.20, 0.40, 0.15, 75., 137., -2289.],
        [0.29, 0.40, 0.10, 156., 167., 0.],
        [0.30, 0.70, 0.10, 144., 125., 0.],
        [0.20, 0.45, 0.15, 19., 46., 0.],
        [0.20, 0.29, 0.11, 151., 263., 0.],
        [0.29, 0.40, 0.10, 206., 212., 0.],
        [0.25, 0.26, 0.15, 109., 162., 0.],])
C1_COOL, C1_WARM, K1, C2_COOL, C2_WARM, C3 = _LS_COEF.T.copy()

SCALE = 4.0

HIGH_LIMIT = 2.0  # third-ranked vote starting the high sensation rule
OPPOSITE_LIMIT = 1.0  # mildest opposite vote still ignored
TRUNK_COOL_LIMIT = -1.0
WARM_HIGH_WEIGHTS = (0.5, 0.5)  # 1st and 3rd ranked
COOL_HIGH_WEIGHTS = (0.38, 0.62)  # 1st and 3rd from the bottom
MODIFIER_WEIGHTS = (1.0, 0.1)
EXTREMES = 3

# Opposite-sensation force buckets keyed by the change from the pre-event
# sensation: (offset, slope, intercept)
FORCE_LIMIT = 2.0
FORCE_BUCKETS = {
        "cool": (-2.0, 0.10, -0.60),
        "mid": (0.0, 0.30, 0.0),
        "warm": (2.0, 0.10, 0.60),
        }


def local_sensation(tout, setpt_sk=None, dtsk=0.0, dtcb=0.0, bsa=None):
    """
    Local thermal sensation of the 16 segments.

    Parameters
    ----------
    tout : array-like (17,)
        Skin temperatures of the segments followed by the central blood
        temperature [K].
    setpt_sk : array-like (16,), optional
        Neutral skin temperatures [oC]. Defaults to the model set points.
    dtsk : float or array-like (16,), optional
        Skin temperature rates [K/s]. The default is 0.
    dtcb : float, optional
        Core temperature rate [K/s]. The default is 0.
    bsa : array-like (16,), optional
        Weights of the mean skin temperature [m2].

    Returns
    -------
    numpy.ndarray (16,)
        Local sensation in [-4, 4].
    """
    tout = np.asarray(tout, dtype=float)
    if tout.shape != (NUM_SEGMENTS + 1,):
        raise ValueError("expected {} temperatures, got {}".format(NUM_SEGMENTS + 1, tout.shape))
    if setpt_sk is None:
        setpt_sk = cons.setpoints()[3:-1:4]
    if bsa is None:
        bsa = cons._BSAst
    dtsk = np.broadcast_to(np.asarray(dtsk, dtype=float), (NUM_SEGMENTS,))

    dev = tout[:NUM_SEGMENTS] - KELVIN - np.asarray(setpt_sk, dtype=float)
    dev_mean = np.average(dev, weights=bsa)

    c1 = np.where(dev < 0, C1_COOL, C1_WARM)
    static = SCALE * (2 / (1 + np.exp(-c1 * dev - K1 * (dev - dev_mean))) - 1)

    c2 = np.where(dtsk < 0, C2_COOL, C2_WARM)
    ls = static + c2 * dtsk + C3 * dtcb
    return np.clip(ls, -SCALE, SCALE)


class Branch(enum.Enum):
    """Rule used for the overall sensation."""
    NO_OPPOSITE_LOW = "no opposite, low sensation"
    NO_OPPOSITE_HIGH = "no opposite, high sensation"
    OPPOSITE_LOW = "opposite, low sensation"
    OPPOSITE_HIGH = "opposite, high sensation"
    OPPOSITE_COOLING = "opposite, trunk cooling"

    @property
    def opposite(self):
        return self not in (Branch.NO_OPPOSITE_LOW, Branch.NO_OPPOSITE_HIGH)


Grouping = namedtuple("Grouping", ["n_plus", "n_minus", "warm", "ranked", "dominant"])

OverallSensationResult = namedtuple("OverallSensationResult", [
        "value", "branch", "n_plus", "n_minus", "big", "modifier", "forces"])


def grouping(ls):
    """
    Count warm and cool votes and rank the votes without duplicated pairs.

    The warm group dominates only when it is strictly larger.
    """
    ls = np.asarray(ls, dtype=float)
    n_plus = int(np.count_nonzero(ls > 0))
    n_minus = int(np.count_nonzero(ls < 0))
    warm = n_plus > n_minus
    ranked, _ = rank(dedupe_pairs(ls, keep="max" if warm else "min"))
    dominant = ranked[ranked > 0] if warm else ranked[ranked < 0]
    return Grouping(n_plus, n_minus, warm, ranked, dominant)


def high_sensation(ranked, warm):
    """
    Weighted mean of the most extreme votes when the 3rd one is intense.

    Returns None when the rule does not apply.
    """
    if len(ranked) < EXTREMES:
        return None
    if warm and ranked[2] >= HIGH_LIMIT:
        return WARM_HIGH_WEIGHTS[0] * ranked[0] + WARM_HIGH_WEIGHTS[1] * ranked[2]
    if not warm and ranked[-3] <= -HIGH_LIMIT:
        return COOL_HIGH_WEIGHTS[0] * ranked[-1] + COOL_HIGH_WEIGHTS[1] * ranked[-3]
    return None


def low_sensation(ranked, warm):
    """
    Mean of the qualifying votes.

    The 3 most extreme votes always count. A vote further down at position p
    counts while its intensity is at least 2 - interval*(p - 3), with
    interval = 2/(n - 2). No votes gives 0.
    """
    n = len(ranked)
    if n == 0:
        return 0.0
    sign = 1.0 if warm else -1.0
    extremes = np.asarray(ranked, dtype=float)
    if not warm:
        extremes = extremes[::-1]

    votes = list(extremes[:EXTREMES])
    if n > EXTREMES:
        interval = HIGH_LIMIT / (n - 2)
        for p in range(EXTREMES + 1, n + 1):
            v = extremes[p - 1]
            if sign * v >= HIGH_LIMIT - interval * (p - EXTREMES):
                votes.append(v)
    return float(np.mean(votes))


def individual_forces(ls, baseline, warm):
    """
    Opposite-sensation forces of the segments.

    Parameters
    ----------
    ls : numpy.ndarray (16,)
        Local sensation.
    baseline : numpy.ndarray (16,)
        Local sensation before the last load event.
    warm : bool
        True when the warm group dominates.

    Returns
    -------
    numpy.ndarray (16,)
        Zero for segments on the dominant side.
    """
    # TODO: the zeroing test is the sign of the local vote; check a +-2
    # magnitude test against measured overall votes.
    delta = ls - baseline
    offset, slope, intercept = (np.empty_like(delta) for _ in range(3))
    for name, mask in (("cool", delta < -FORCE_LIMIT),
                       ("mid", np.abs(delta) <= FORCE_LIMIT),
                       ("warm", delta > FORCE_LIMIT)):
        offset[mask], slope[mask], intercept[mask] = FORCE_BUCKETS[name]
    force = slope * (delta - offset) + intercept

    force[~minority(ls, warm)] = 0.0
    return force


def minority(ls, warm):
    """Mask of the segments voting against the dominant side."""
    return ls < 0 if warm else ls > 0


def extreme_forces(forces, mask):
    """
    The two forces of largest magnitude among the masked segments.

    Ties keep the segment order. Missing forces count as 0.
    """
    picked = np.asarray(forces, dtype=float)[mask]
    picked = picked[np.argsort(-np.abs(picked), kind="stable")]
    picked = np.append(picked, [0.0, 0.0])
    return picked[0], picked[1]


def select_branch(ls, group=None):
    """
    Choose the overall sensation rule.

    Parameters
    ----------
    ls : array-like (16,)
        Local sensation.
    group : Grouping, optional
        Precomputed grouping of ls.

    Returns
    -------
    Branch
    """
    ls = np.asarray(ls, dtype=float)
    if group is None:
        group = grouping(ls)
    high = high_sensation(group.ranked, group.warm) is not None

    if group.n_plus == 0 or group.n_minus == 0:
        return Branch.NO_OPPOSITE_HIGH if high else Branch.NO_OPPOSITE_LOW
    if not high:
        tail = group.ranked[-1] if group.warm else group.ranked[0]
        if (group.warm and tail >= -OPPOSITE_LIMIT) or (not group.warm and tail <= OPPOSITE_LIMIT):
            return Branch.NO_OPPOSITE_LOW
    if group.warm and np.any(ls[TRUNK] <= TRUNK_COOL_LIMIT):
        return Branch.OPPOSITE_COOLING
    if high_sensation(group.dominant, group.warm) is not None:
        return Branch.OPPOSITE_HIGH
    return Branch.OPPOSITE_LOW


def overall_sensation(ls, baseline=None):
    """
    Overall thermal sensation.

    Parameters
    ----------
    ls : array-like (16,)
        Local sensation.
    baseline : array-like (16,), optional
        Local sensation before the last load event. The default is zeros.

    Returns
    -------
    OverallSensationResult
    """
    ls = np.asarray(ls, dtype=float)
    if ls.shape != (NUM_SEGMENTS,):
        raise ValueError("expected {} local votes, got {}".format(NUM_SEGMENTS, ls.shape))
    baseline = np.zeros(NUM_SEGMENTS) if baseline is None else np.asarray(baseline, dtype=float)

    group = grouping(ls)
    branch = select_branch(ls, group)
    forces = np.zeros(NUM_SEGMENTS)
    modifier = 0.0

    if branch is Branch.NO_OPPOSITE_HIGH:
        big = high_sensation(group.ranked, group.warm)
    elif branch is Branch.NO_OPPOSITE_LOW:
        big = low_sensation(group.ranked, group.warm)
    elif branch is Branch.OPPOSITE_COOLING:
        big = float(ls[TRUNK].min())
    else:
        if branch is Branch.OPPOSITE_HIGH:
            big = high_sensation(group.dominant, group.warm)
        else:
            big = low_sensation(group.dominant, group.warm)
        forces = individual_forces(ls, baseline, group.warm)
        f1, f2 = extreme_forces(forces, minority(ls, group.warm))
        modifier = MODIFIER_WEIGHTS[0] * f1 + MODIFIER_WEIGHTS[1] * f2

    return OverallSensationResult(float(big + modifier), branch, group.n_plus, group.n_minus,
                                  float(big), float(modifier), forces)


class OverallSensation():
    """
    Overall sensation with the pre-event sensation memory.

    On the rising edge of load_applied the local sensation of the previous
    call is stored as the "on" baseline, on the rising edge of load_removed
    as the "off" baseline. Baselines start at zero and stay fixed between
    events.
    """

    def __init__(self):
        self.memory_on = np.zeros(NUM_SEGMENTS)
        self.memory_off = np.zeros(NUM_SEGMENTS)
        self._previous_ls = None
        self._previous_events = None
        self.last = None

    def baseline(self, events):
        """Pre-event sensation selected by the active flag."""
        applied, removed = events
        if applied:
            return self.memory_on
        if removed:
            return self.memory_off
        return np.zeros(NUM_SEGMENTS)

    def compute(self, ls, events):
        """
        Update the memory and return the overall sensation.

        Parameters
        ----------
        ls : array-like (16,)
            Local sensation.
        events : tuple of bool
            (load_applied, load_removed) flags.

        Returns
        -------
        OverallSensationResult
        """
        ls = np.array(ls, dtype=float)
        applied, removed = bool(events[0]), bool(events[1])

        if self._previous_events is not None:
            was_applied, was_removed = self._previous_events
            if applied and not was_applied:
                self.memory_on = self._previous_ls.copy()
                logger.debug("on baseline captured: %s", self.memory_on)
            if removed and not was_removed:
                self.memory_off = self._previous_ls.copy()
                logger.debug("off baseline captured: %s", self.memory_off)
        self._previous_events = (applied, removed)
        self._previous_ls = ls.copy()

        self.last = overall_sensation(ls, self.baseline((applied, removed)))
        return self.last
